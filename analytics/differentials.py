"""Score differentials and the other per-round WHS formulas.

Score Differential = (Adjusted Gross Score - Course Rating) x 113 / Slope Rating

Nothing here rounds its result unless the formula itself produces a whole
number of strokes (course and playing handicaps, hole maximums). Display
precision is left to the caller.

The index engine works from entered totals, so exceptional score reduction
and the soft and hard caps are not applied to it. They are here for callers
that post WHS-adjusted scores or cap an index against a stored low index.
The report uses the course and playing handicaps and adjusted gross score.
"""

from __future__ import annotations

import math
from typing import Optional

from models.round import Round

from .config import STANDARD_SLOPE


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_differential(
    total_score: float,
    course_rating: Optional[float],
    slope_rating: Optional[float],
) -> Optional[float]:
    """Course-normalized score for one round, or None when the tee is unrated."""
    if not course_rating or course_rating <= 0:
        return None
    if not slope_rating or slope_rating <= 0:
        return None
    return ((total_score - course_rating) * STANDARD_SLOPE) / slope_rating


def round_differential(round_obj: Round) -> Optional[float]:
    """Differential for a Round using the tee box it was played from."""
    return compute_differential(
        round_obj.total_score, round_obj.get_rating(), round_obj.get_slope()
    )


def course_handicap(
    handicap_index: float,
    slope_rating: float,
    course_rating: float,
    course_par: int,
) -> int:
    """Course Handicap = Index x (Slope / 113) + (Course Rating - Par), to the nearest stroke."""
    raw = handicap_index * (slope_rating / STANDARD_SLOPE) + (course_rating - course_par)
    return _round_half_up(raw)


def playing_handicap(course_handicap_value: int, allowance: float = 0.95) -> int:
    """Course handicap scaled by the format allowance (95% for individual stroke play)."""
    return _round_half_up(course_handicap_value * allowance)


def handicap_strokes_for_hole(course_handicap_value: int, stroke_index: int) -> int:
    """Strokes received on a hole with the given stroke index (1 = hardest)."""
    if course_handicap_value > 0:
        strokes = 0
        if stroke_index <= course_handicap_value:
            strokes = 1
        if course_handicap_value > 18 and stroke_index <= course_handicap_value - 18:
            strokes = 2
        if course_handicap_value > 36 and stroke_index <= course_handicap_value - 36:
            strokes = 3
        return strokes
    if course_handicap_value < 0:
        # Plus handicaps give strokes back, starting from the easiest hole.
        if 19 - stroke_index <= abs(course_handicap_value):
            return -1
    return 0


def max_hole_score(course_handicap_value: int, par: int, stroke_index: int) -> int:
    """Net double bogey: par + 2 + strokes received on the hole."""
    return par + 2 + handicap_strokes_for_hole(course_handicap_value, stroke_index)


def adjusted_gross_score(round_obj: Round, course_handicap_value: int) -> Optional[int]:
    """Total with every hole capped at net double bogey.

    Uses each hole's stroke index when recorded, otherwise its position on the card.
    Returns None for rounds logged without hole detail.
    """
    if not round_obj.holes:
        return None

    total = 0
    for position, hole in enumerate(round_obj.holes, start=1):
        stroke_index = hole.handicap or position
        cap = max_hole_score(course_handicap_value, hole.par, stroke_index)
        total += min(hole.score, cap)
    return total


def exceptional_score_reduction(differential: float, handicap_index: float) -> float:
    """Extra reduction when a round beats the index by 7.0 (-1.0) or 10.0 (-2.0) strokes."""
    difference = handicap_index - differential
    if difference >= 10.0:
        return -2.0
    if difference >= 7.0:
        return -1.0
    return 0.0


def apply_handicap_caps(calculated_index: float, low_index: float) -> float:
    """Limit increases over the low index.

    Soft cap: increases beyond 3.0 strokes count at 50%.
    Hard cap: never more than 5.0 strokes above the low index.
    """
    increase = calculated_index - low_index
    if increase <= 3.0:
        return calculated_index

    capped = low_index + 3.0 + (increase - 3.0) * 0.5
    return min(capped, low_index + 5.0)
