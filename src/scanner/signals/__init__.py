"""Signal scoring, tagging and ranking for perpetual instruments.

Provides the lenient field parser, the capped composite score, threshold
tags, and the SignalEngine that ranks a snapshot into the top N signals.
"""

from scanner.signals.composite import (
    compute_score_breakdown,
    compute_turnover_ratio,
    funding_score,
    momentum_score,
    oi_score,
    turnover_score,
)
from scanner.signals.engine import SignalEngine, compute_signals, rank_signals, take_top
from scanner.signals.models import ScoreBreakdown, Signal, SignalBoard, build_board
from scanner.signals.parsing import parse_float, parse_number
from scanner.signals.tags import Tag, classify_tags

__all__ = [
    "ScoreBreakdown",
    "Signal",
    "SignalBoard",
    "SignalEngine",
    "Tag",
    "build_board",
    "classify_tags",
    "compute_score_breakdown",
    "compute_signals",
    "compute_turnover_ratio",
    "funding_score",
    "momentum_score",
    "oi_score",
    "parse_float",
    "parse_number",
    "rank_signals",
    "take_top",
    "turnover_score",
]
