from datetime import date, timedelta

import pytest

from analytics.exceptions import RoundsRequiredError
from analytics.handicap import compute_index
from analytics.potential import (
    HYPOTHETICAL_ROUND_ID,
    build_hypothetical_round,
    hypothetical_score,
    project_potential,
)
from models import Hole, Round, TeeBox

TODAY = date(2024, 6, 1)


def _build_rounds(overs):
    start = date(2024, 1, 1)
    return [
        Round(
            id=f"r{i}",
            course_name="Pine Valley",
            date=start + timedelta(days=i),
            total_score=72 + over,
            course_par=72,
            tee_box=TeeBox(name="Blue", rating=72.0, slope=113),
        )
        for i, over in enumerate(overs)
    ]


def test_hypothetical_score():
    assert hypothetical_score(72, 15.4) == 82
    # never better than three under par
    assert hypothetical_score(72, 2.0) == 69
    assert hypothetical_score(72, 0.5) == 69
    assert hypothetical_score(72, -1.5) == 69


def test_build_hypothetical_round_copies_latest():
    holes = [Hole(number=i, par=4, score=5) for i in range(1, 19)]
    latest = _build_rounds([18])[0].copy_with(holes=holes, notes="windy")
    synthetic = build_hypothetical_round(latest, 15.4, TODAY)

    assert synthetic.id == HYPOTHETICAL_ROUND_ID
    assert synthetic.date == TODAY
    assert synthetic.total_score == 82
    assert synthetic.course_name == "Pine Valley"
    assert synthetic.tee_box == latest.tee_box
    assert synthetic.holes == []
    assert synthetic.notes is None
    assert len(latest.holes) == 18


def test_potential_needs_three_rounds_and_an_index():
    assert project_potential(_build_rounds([10, 12]), 10.0, today=TODAY) is None
    assert project_potential(_build_rounds([10, 12, 14]), None, today=TODAY) is None


def test_potential_adds_one_excellent_round():
    rounds = _build_rounds([15, 16, 17, 18, 19, 20])
    current = compute_index(rounds)          # best 2 of 6: 15.5
    assert current == pytest.approx(15.5)

    # synthetic: 72 + 15 - 5 = 82 -> differential 10; best 2 of 7: (10 + 15) / 2
    assert project_potential(rounds, current, today=TODAY) == pytest.approx(12.5)


def test_potential_does_not_mutate_input():
    rounds = _build_rounds([15, 16, 17])
    before = [r.model_dump() for r in rounds]
    project_potential(rounds, compute_index(rounds), today=TODAY)

    assert len(rounds) == 3
    assert [r.model_dump() for r in rounds] == before


def test_potential_none_rounds_raise():
    with pytest.raises(RoundsRequiredError):
        project_potential(None, 10.0)
