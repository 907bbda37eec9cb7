"""Signal data models: per-instrument signals, score breakdowns, and the output envelope."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-score contributions to a composite score.

    Each sub-score is independently capped; ``total`` is their sum.
    """

    turnover_ratio: float  # volume / max(open interest, 1)
    turnover_score: float
    funding_score: float
    momentum_score: float
    oi_score: float
    total: float


@dataclass(frozen=True)
class Signal:
    """Ranked, display-ready view of one perpetual instrument.

    Percent fields (``change_24h``, ``funding_rate``) are already scaled by
    100. ``volume_24h`` and ``open_interest`` are USD notional.
    """

    symbol: str
    price: float
    change_24h: float
    volume_24h: float
    funding_rate: float
    open_interest: float
    score: float
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the outbound camelCase contract."""
        return {
            "symbol": self.symbol,
            "price": self.price,
            "change24h": self.change_24h,
            "volume24h": self.volume_24h,
            "fundingRate": self.funding_rate,
            "openInterest": self.open_interest,
            "score": self.score,
            "tags": list(self.tags),
        }


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class SignalBoard:
    """Ranked signals wrapped with the builder address and generation time."""

    signals: tuple[Signal, ...]
    builder_address: str
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "signals": [s.to_dict() for s in self.signals],
            "builderAddress": self.builder_address,
            "updatedAt": format_timestamp(self.updated_at),
        }


def build_board(
    signals: list[Signal],
    builder_address: str,
    now: datetime | None = None,
) -> SignalBoard:
    """Wrap a ranked signal list in the outbound envelope.

    Args:
        signals: Already ranked and truncated signals.
        builder_address: Opaque destination address from configuration.
        now: Generation time; defaults to the current UTC time.
    """
    return SignalBoard(
        signals=tuple(signals),
        builder_address=builder_address,
        updated_at=now if now is not None else datetime.now(timezone.utc),
    )
