"""Threshold-based classification tags for derived instrument metrics."""

from enum import Enum

from scanner.config import SignalSettings


class Tag(str, Enum):
    """Short classification labels attached to a signal."""

    PUMPING = "Pumping"
    DUMPING = "Dumping"
    HIGH_FUNDING = "High Funding"
    NEG_FUNDING = "Neg Funding"
    HIGH_TURNOVER = "High Turnover"
    OVERHEATED = "Overheated"
    SHORT_SQUEEZE_RISK = "Short Squeeze Risk"
    HIGH_VOLUME = "High Volume"


def classify_tags(
    change_24h: float,
    funding_rate: float,
    turnover_ratio: float,
    volume_24h: float,
    settings: SignalSettings,
) -> list[str]:
    """Return the tags whose threshold conditions hold.

    Rules are independent and evaluated in a fixed order, which is also the
    order of the returned labels:
    1. |change| > move_pct            -> Pumping / Dumping
    2. |funding| > funding_pct        -> High Funding / Neg Funding
    3. turnover_ratio > threshold     -> High Turnover
    4. funding > overheated_pct       -> Overheated
    5. funding < -overheated_pct      -> Short Squeeze Risk
    6. volume > high_volume_usd       -> High Volume
    """
    tags: list[Tag] = []

    if abs(change_24h) > settings.move_pct:
        tags.append(Tag.PUMPING if change_24h > 0 else Tag.DUMPING)

    if abs(funding_rate) > settings.funding_pct:
        tags.append(Tag.HIGH_FUNDING if funding_rate > 0 else Tag.NEG_FUNDING)

    if turnover_ratio > settings.turnover_ratio:
        tags.append(Tag.HIGH_TURNOVER)

    if funding_rate > settings.overheated_pct:
        tags.append(Tag.OVERHEATED)

    if funding_rate < -settings.overheated_pct:
        tags.append(Tag.SHORT_SQUEEZE_RISK)

    if volume_24h > settings.high_volume_usd:
        tags.append(Tag.HIGH_VOLUME)

    return [tag.value for tag in tags]
