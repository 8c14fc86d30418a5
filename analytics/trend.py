from __future__ import annotations

from typing import Optional, Sequence

from models.handicap import HandicapIndexSnapshot, Trend

from .config import DEFAULT_SETTINGS, HandicapSettings


def compare_indexes(current: float, previous: float, deadband: float = 0.0) -> Trend:
    """Lower is better: a drop beyond the deadband is improvement."""
    if current < previous - deadband:
        return "improving"
    if current > previous + deadband:
        return "declining"
    return "stable"


def classify_trend(
    history: Sequence[HandicapIndexSnapshot],
    settings: Optional[HandicapSettings] = None,
) -> Trend:
    """
    Compare the latest index with the snapshot `trend_lookback` places from
    the end (the latest counts as the first of them).

    Stable when there are fewer than `trend_lookback` indexed snapshots, or
    when either end of the comparison has no index yet. The deadband keeps a
    single round from flipping the classification.
    """
    settings = settings or DEFAULT_SETTINGS
    lookback = settings.trend_lookback

    indexed = sum(1 for snapshot in history if snapshot.index is not None)
    if indexed < lookback or len(history) < lookback:
        return "stable"

    current = history[-1].index
    previous = history[-lookback].index
    if current is None or previous is None:
        return "stable"

    return compare_indexes(current, previous, settings.trend_deadband)
