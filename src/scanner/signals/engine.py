"""Signal engine turning a raw market snapshot into ranked signals.

The engine is a pure, synchronous transform with three discrete stages:
1. derive_signals -- parse each instrument, apply the validity gate, score and tag
2. rank_signals   -- stable sort by score descending
3. take_top       -- truncate to the configured top N

Malformed numeric fields never raise; they degrade to defaults via
parse_float. The only exclusions are a missing context and the validity
gate (non-positive price or volume). Negative open interest counts as zero.
"""

from __future__ import annotations

from collections.abc import Sequence

from scanner.config import SignalSettings
from scanner.logging import get_logger
from scanner.models import InstrumentMeta, RawInstrumentContext
from scanner.signals.composite import compute_score_breakdown
from scanner.signals.models import Signal
from scanner.signals.parsing import parse_float
from scanner.signals.tags import classify_tags

logger = get_logger(__name__)


def rank_signals(signals: Sequence[Signal]) -> list[Signal]:
    """Sort by score descending. Equal scores keep their input order."""
    return sorted(signals, key=lambda s: s.score, reverse=True)


def take_top(signals: Sequence[Signal], n: int) -> list[Signal]:
    """Return at most the first ``n`` signals."""
    return list(signals[: max(n, 0)])


class SignalEngine:
    """Derives, scores, tags and ranks perpetual instruments.

    Holds no state between calls; every computation starts from scratch,
    so one engine can serve concurrent callers.

    Args:
        settings: Score weights, caps, tag thresholds and top_n.
    """

    def __init__(self, settings: SignalSettings | None = None) -> None:
        self._settings = settings or SignalSettings()

    @property
    def settings(self) -> SignalSettings:
        return self._settings

    def derive_signal(
        self,
        meta: InstrumentMeta | None,
        ctx: RawInstrumentContext | None,
    ) -> Signal | None:
        """Derive a single Signal, or None if the instrument is skipped.

        Skipped when the context (or metadata) is absent, or when price or
        24h volume is not strictly positive.
        """
        if ctx is None or meta is None:
            return None

        price = parse_float(ctx.mark_px)
        prev_price = parse_float(ctx.prev_day_px, default=price)
        change_24h = (price - prev_price) / prev_price * 100 if prev_price > 0 else 0.0
        volume_24h = parse_float(ctx.day_ntl_vlm)
        open_interest = max(parse_float(ctx.open_interest), 0.0) * price
        funding_rate = parse_float(ctx.funding) * 100

        # Inactive, illiquid or negative-valued instruments are dropped, not zero-scored
        if price <= 0 or volume_24h <= 0:
            return None

        breakdown = compute_score_breakdown(
            change_24h=change_24h,
            volume_24h=volume_24h,
            funding_rate=funding_rate,
            open_interest=open_interest,
            settings=self._settings,
        )
        tags = classify_tags(
            change_24h=change_24h,
            funding_rate=funding_rate,
            turnover_ratio=breakdown.turnover_ratio,
            volume_24h=volume_24h,
            settings=self._settings,
        )

        logger.debug(
            "signal_derived",
            symbol=meta.name,
            score=round(breakdown.total, 4),
            turnover_score=round(breakdown.turnover_score, 4),
            funding_score=round(breakdown.funding_score, 4),
            momentum_score=round(breakdown.momentum_score, 4),
            oi_score=round(breakdown.oi_score, 4),
            tags=tags,
        )

        return Signal(
            symbol=meta.name,
            price=price,
            change_24h=change_24h,
            volume_24h=volume_24h,
            funding_rate=funding_rate,
            open_interest=open_interest,
            score=breakdown.total,
            tags=tuple(tags),
        )

    def derive_signals(
        self,
        universe: Sequence[InstrumentMeta | None],
        contexts: Sequence[RawInstrumentContext | None],
    ) -> list[Signal]:
        """Derive signals for every instrument, in snapshot order.

        Instruments beyond the end of ``contexts`` are treated as having
        no context.
        """
        signals: list[Signal] = []
        for i, meta in enumerate(universe):
            ctx = contexts[i] if i < len(contexts) else None
            signal = self.derive_signal(meta, ctx)
            if signal is not None:
                signals.append(signal)
        return signals

    def compute_signals(
        self,
        universe: Sequence[InstrumentMeta | None],
        contexts: Sequence[RawInstrumentContext | None],
    ) -> list[Signal]:
        """Derive, rank and truncate signals for one snapshot.

        Args:
            universe: Instrument metadata in exchange order.
            contexts: Market contexts aligned by index with ``universe``.

        Returns:
            At most top_n signals sorted by score descending (stable).
        """
        derived = self.derive_signals(universe, contexts)
        ranked = rank_signals(derived)
        top = take_top(ranked, self._settings.top_n)

        logger.info(
            "signals_computed",
            instruments=len(universe),
            emitted=len(derived),
            kept=len(top),
            top_symbol=top[0].symbol if top else None,
        )
        return top


def compute_signals(
    universe: Sequence[InstrumentMeta | None],
    contexts: Sequence[RawInstrumentContext | None],
    settings: SignalSettings | None = None,
) -> list[Signal]:
    """Functional entry point: rank one snapshot with the given (or default) settings."""
    return SignalEngine(settings).compute_signals(universe, contexts)
