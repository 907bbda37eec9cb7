"""Composite interestingness score for a single perpetual instrument.

Combines four independently capped sub-scores so no single dimension
dominates the ranking:

  turnover_ratio = volume_24h / max(open_interest, 1)
  turnover_score = min(turnover_ratio, turnover_cap) * turnover_weight
  funding_score  = min(|funding_rate| / funding_norm, 1) * funding_weight
  momentum_score = min(|change_24h| * momentum_factor, momentum_cap)
  oi_score       = min(max(open_interest, 0) / oi_norm, 1) * oi_weight
  score          = turnover + funding + momentum + oi

With default settings the score lies in [0, 23].
"""

from scanner.config import SignalSettings
from scanner.signals.models import ScoreBreakdown


def compute_turnover_ratio(volume_24h: float, open_interest: float) -> float:
    """Volume traded relative to open risk. OI below $1 is floored to 1."""
    return volume_24h / max(open_interest, 1.0)


def turnover_score(turnover_ratio: float, cap: float = 5.0, weight: float = 2.0) -> float:
    return min(turnover_ratio, cap) * weight


def funding_score(funding_rate: float, norm: float = 0.1, weight: float = 3.0) -> float:
    """Score funding extremity in either direction.

    Args:
        funding_rate: Funding rate in percent per period (signed).
        norm: Absolute rate (percent) that earns the full weight.
        weight: Maximum contribution.
    """
    return min(abs(funding_rate) / norm, 1.0) * weight


def momentum_score(change_24h: float, factor: float = 0.4, cap: float = 8.0) -> float:
    return min(abs(change_24h) * factor, cap)


def oi_score(open_interest: float, norm: float = 500_000_000.0, weight: float = 2.0) -> float:
    return min(max(open_interest, 0.0) / norm, 1.0) * weight


def compute_score_breakdown(
    change_24h: float,
    volume_24h: float,
    funding_rate: float,
    open_interest: float,
    settings: SignalSettings,
) -> ScoreBreakdown:
    """Compute every sub-score and the composite total for one instrument.

    Args:
        change_24h: 24h price change in percent.
        volume_24h: 24h notional volume in USD.
        funding_rate: Funding rate in percent.
        open_interest: Open interest in USD notional.
        settings: Weights and caps.

    Returns:
        ScoreBreakdown with the ratio, the four sub-scores and their sum.
    """
    ratio = compute_turnover_ratio(volume_24h, open_interest)
    turnover = turnover_score(ratio, settings.turnover_cap, settings.turnover_weight)
    funding = funding_score(funding_rate, settings.funding_norm, settings.funding_weight)
    momentum = momentum_score(change_24h, settings.momentum_factor, settings.momentum_cap)
    oi = oi_score(open_interest, settings.oi_norm, settings.oi_weight)

    return ScoreBreakdown(
        turnover_ratio=ratio,
        turnover_score=turnover,
        funding_score=funding,
        momentum_score=momentum,
        oi_score=oi,
        total=turnover + funding + momentum + oi,
    )
