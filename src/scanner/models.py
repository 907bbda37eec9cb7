"""Shared data models for raw market snapshots.

Raw numeric fields are kept exactly as the exchange sent them (decimal
strings, possibly missing). Conversion to numbers happens in the signal
engine, where malformed values degrade to defaults.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class InstrumentMeta:
    """Static metadata for one perpetual instrument in the exchange universe."""

    name: str


@dataclass(frozen=True)
class RawInstrumentContext:
    """Per-instrument market context as reported by the exchange.

    All numeric values are the raw wire strings (or None when absent).
    """

    symbol: str
    mark_px: str | None = None
    prev_day_px: str | None = None
    day_ntl_vlm: str | None = None
    open_interest: str | None = None
    funding: str | None = None

    @classmethod
    def from_dict(cls, symbol: str, data: dict[str, Any]) -> "RawInstrumentContext":
        """Build from a Hyperliquid asset context dict (camelCase wire keys).

        Values that are not strings are stringified so the engine sees a
        single representation; None stays None. Unknown keys are ignored.
        """

        def _raw(key: str) -> str | None:
            value = data.get(key)
            if value is None:
                return None
            return value if isinstance(value, str) else str(value)

        return cls(
            symbol=symbol,
            mark_px=_raw("markPx"),
            prev_day_px=_raw("prevDayPx"),
            day_ntl_vlm=_raw("dayNtlVlm"),
            open_interest=_raw("openInterest"),
            funding=_raw("funding"),
        )


@dataclass
class Snapshot:
    """One fetched market snapshot: universe metadata and positionally aligned contexts.

    ``contexts[i]`` describes ``universe[i]``; a None entry means the exchange
    sent no context for that instrument.
    """

    universe: list[InstrumentMeta | None] = field(default_factory=list)
    contexts: list[RawInstrumentContext | None] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.universe)
