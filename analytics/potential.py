"""What-if projection: the index after one more excellent round."""

from __future__ import annotations

import math
from datetime import date
from typing import List, Optional

from models.round import Round

from .config import HandicapSettings
from .exceptions import require_rounds
from .handicap import compute_index, sort_chronologically

HYPOTHETICAL_ROUND_ID = "hypothetical"


def hypothetical_score(course_par: int, current_index: float) -> int:
    """Five strokes better than the index plays, but never below three under par."""
    return max(course_par + math.floor(current_index) - 5, course_par - 3)


def build_hypothetical_round(
    latest: Round,
    current_index: float,
    today: Optional[date] = None,
) -> Round:
    """Copy of the latest round's course and tee, with an excellent score dated today."""
    return latest.copy_with(
        id=HYPOTHETICAL_ROUND_ID,
        date=today or date.today(),
        total_score=hypothetical_score(latest.course_par, current_index),
        holes=[],
        stats=None,
        notes=None,
    )


def project_potential(
    rounds: List[Round],
    current_index: Optional[float],
    settings: Optional[HandicapSettings] = None,
    today: Optional[date] = None,
) -> Optional[float]:
    """Index the player would have after shooting the hypothetical round next.

    The caller's rounds are not modified.
    """
    require_rounds(rounds, "project_potential")
    if current_index is None or len(rounds) < 3:
        return None

    ordered = sort_chronologically(rounds)
    synthetic = build_hypothetical_round(ordered[-1], current_index, today)
    return compute_index(ordered + [synthetic], settings)
