import pytest
from datetime import date
from pydantic import ValidationError

from models import (
    HandicapIndexSnapshot,
    HandicapRecord,
    Hole,
    Round,
    RoundFilters,
    RoundStats,
    TeeBox,
)


# ================================================================
# Hole
# ================================================================

def test_hole_validation():
    h = Hole(number=1, par=4, score=5, handicap=18)
    assert h.number == 1
    assert h.to_par() == 1
    assert h.get_score_type() == "bogey"

    with pytest.raises(ValidationError):
        Hole(number=1, par=7, score=5)       # par > 6

    with pytest.raises(ValidationError):
        Hole(number=1, par=4, score=5, handicap=19)

    with pytest.raises(ValidationError):
        Hole(number=19, par=4, score=5)


def test_hole_putts_cannot_exceed_score():
    with pytest.raises(ValidationError):
        Hole(par=3, score=2, putts=3)

    h = Hole(par=3, score=3, putts=3)
    assert h.putts == 3


@pytest.mark.parametrize(
    "score,expected",
    [(1, "eagle"), (2, "eagle"), (3, "birdie"), (4, "par"),
     (5, "bogey"), (6, "double_bogey"), (7, "triple_bogey"), (10, "triple_bogey")],
)
def test_hole_score_type_buckets(score, expected):
    assert Hole(par=4, score=score).get_score_type() == expected


def test_update_field_reports_validation_error():
    h = Hole(par=4, score=4)
    assert h.update_field("score", 5) is None
    assert h.score == 5

    error = h.update_field("score", 0)
    assert error is not None
    assert h.score == 5


# ================================================================
# TeeBox
# ================================================================

def test_tee_box_ratable():
    assert TeeBox(rating=71.2, slope=128).is_ratable()
    assert not TeeBox(rating=71.2).is_ratable()
    assert not TeeBox(slope=128).is_ratable()
    assert not TeeBox(name="Red").is_ratable()


def test_tee_box_slope_range():
    with pytest.raises(ValidationError):
        TeeBox(rating=70.0, slope=160)
    with pytest.raises(ValidationError):
        TeeBox(rating=70.0, slope=50)


# ================================================================
# Round
# ================================================================

def _build_holes(scores, par=4):
    return [Hole(number=i, par=par, score=s) for i, s in enumerate(scores, start=1)]


def test_round_score_to_par_and_ratable():
    r = Round(
        date=date(2024, 5, 1), total_score=85, course_par=72,
        tee_box=TeeBox(rating=71.0, slope=125),
    )
    assert r.score_to_par() == 13
    assert r.is_ratable()
    assert r.get_rating() == 71.0
    assert r.get_slope() == 125

    unrated = Round(date=date(2024, 5, 1), total_score=85, course_par=72)
    assert not unrated.is_ratable()
    assert unrated.get_rating() is None


def test_round_requires_positive_score_and_date():
    with pytest.raises(ValidationError):
        Round(date=date(2024, 5, 1), total_score=0, course_par=72)
    with pytest.raises(ValidationError):
        Round(total_score=80, course_par=72)


def test_round_caps_holes_at_18():
    with pytest.raises(ValidationError):
        Round(date=date(2024, 5, 1), total_score=80, course_par=72,
              holes=_build_holes([4] * 19))


def test_round_nine_hole_totals():
    holes = _build_holes([4] * 9 + [5] * 9)
    r = Round(date=date(2024, 5, 1), total_score=81, course_par=72, holes=holes)

    assert r.calculate_total_score() == 81
    assert r.calculate_front_nine() == 36
    assert r.calculate_back_nine() == 45
    assert r.get_hole(10).score == 5
    assert r.get_hole(19) is None


def test_round_without_holes():
    r = Round(date=date(2024, 5, 1), total_score=81, course_par=72)
    assert r.calculate_total_score() is None
    assert r.calculate_back_nine() is None
    assert r.get_stats() is None


def test_round_stats_derived_from_holes():
    holes = [
        Hole(number=1, par=4, score=4, fairway_hit=True, green_in_regulation=True, putts=2),
        Hole(number=2, par=3, score=3, green_in_regulation=True, putts=2),
        Hole(number=3, par=5, score=6, fairway_hit=False, putts=1, penalties=1),
        Hole(number=4, par=4, score=5),
    ]
    r = Round(date=date(2024, 5, 1), total_score=18, course_par=36, holes=holes)
    stats = r.get_stats()

    assert stats.fairways_hit == 1
    assert stats.fairways_total == 3
    assert stats.greens_in_regulation == 2
    assert stats.total_putts == 5
    assert stats.penalties == 1


def test_round_stats_prefers_entered_stats():
    entered = RoundStats(fairways_hit=7, fairways_total=14, greens_in_regulation=9, total_putts=31)
    r = Round(
        date=date(2024, 5, 1), total_score=80, course_par=72,
        holes=_build_holes([4] * 18), stats=entered,
    )
    assert r.get_stats() is entered


def test_copy_with_validates_and_leaves_original():
    r = Round(id="r1", date=date(2024, 5, 1), total_score=80, course_par=72,
              holes=_build_holes([4] * 18))
    copy = r.copy_with(id="r2", holes=[])

    assert copy.id == "r2"
    assert copy.holes == []
    assert r.id == "r1"
    assert len(r.holes) == 18

    with pytest.raises(ValidationError):
        r.copy_with(total_score=-1)


# ================================================================
# Handicap models and filters
# ================================================================

def test_snapshot_is_frozen():
    s = HandicapIndexSnapshot(date=date(2024, 5, 1), index=None, round_count_at_time=1)
    with pytest.raises(ValidationError):
        s.index = 10.0

    with pytest.raises(ValidationError):
        HandicapIndexSnapshot(date=date(2024, 5, 1), index=3.0, round_count_at_time=0)


def test_handicap_record_defaults():
    record = HandicapRecord(user_id="u1", handicap_index=12.3, date=date(2024, 5, 1), low_index=11.0)
    assert record.trend == "stable"
    assert record.included_rounds == []

    with pytest.raises(ValidationError):
        HandicapRecord(user_id="u1", handicap_index=12.3, date=date(2024, 5, 1),
                       low_index=11.0, trend="sideways")


def test_round_filters_date_range():
    RoundFilters(date_from=date(2024, 1, 1), date_to=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        RoundFilters(date_from=date(2024, 2, 1), date_to=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        RoundFilters(limit=0)
