from datetime import date, timedelta

from analytics.config import HandicapSettings
from analytics.trend import classify_trend, compare_indexes
from models import HandicapIndexSnapshot


def _build_history(indexes):
    start = date(2024, 1, 1)
    return [
        HandicapIndexSnapshot(date=start + timedelta(days=i), index=value, round_count_at_time=i + 1)
        for i, value in enumerate(indexes)
    ]


def test_compare_indexes():
    assert compare_indexes(10.0, 12.0) == "improving"
    assert compare_indexes(12.0, 10.0) == "declining"
    assert compare_indexes(10.0, 10.0) == "stable"
    assert compare_indexes(10.0, 10.4, deadband=0.5) == "stable"


def test_short_history_is_stable():
    assert classify_trend([]) == "stable"
    assert classify_trend(_build_history([None, None, 20.0, 18.0, 10.0])) == "stable"


def test_improving_and_declining():
    improving = _build_history([None, None, 15.0, 15.0, 15.0, 15.0, 15.0, 13.0])
    assert classify_trend(improving) == "improving"

    declining = _build_history([None, None, 12.0, 12.0, 12.0, 12.0, 12.0, 14.0])
    assert classify_trend(declining) == "declining"


def test_deadband_keeps_small_moves_stable():
    history = _build_history([None, None, 12.0, 12.0, 12.0, 12.0, 12.0, 11.6])
    assert classify_trend(history) == "stable"

    history = _build_history([None, None, 12.0, 12.0, 12.0, 12.0, 12.0, 11.4])
    assert classify_trend(history) == "improving"


def test_five_indexed_snapshots_are_enough():
    history = _build_history([None, None, 20.0, 18.0, 16.0, 14.0, 10.0])
    assert classify_trend(history) == "improving"

    history = _build_history([None, None, 12.0, 13.0, 14.0, 15.0, 16.0])
    assert classify_trend(history) == "declining"


def test_lookback_without_index_is_stable():
    # the window dropped enough ratable rounds to lose the index for a while
    history = _build_history([20.0, 18.0, 16.0, 14.0, None, 12.0, 11.0, 10.0, 9.0])
    assert classify_trend(history) == "stable"


def test_trend_uses_settings():
    history = _build_history([20.0, 19.0, 18.0])
    settings = HandicapSettings(trend_lookback=2, trend_deadband=0.0)
    assert classify_trend(history, settings) == "improving"
