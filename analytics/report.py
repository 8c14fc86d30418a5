"""Bundles the handicap calculations the way the dashboard and API consume them."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from models.handicap import HandicapRecord
from models.round import Round

from .config import DEFAULT_SETTINGS, HandicapSettings
from .differentials import adjusted_gross_score, course_handicap, playing_handicap
from .exceptions import require_rounds
from .handicap import (
    compute_history,
    compute_index,
    counting_rounds,
    low_index,
    sort_chronologically,
)
from .potential import project_potential
from .trend import classify_trend, compare_indexes

logger = logging.getLogger(__name__)

# handicap_records.handicap_index and low_index are NUMERIC(6, 3).
STORED_INDEX_DECIMALS = 3


def _course_handicap_for(round_obj: Round, index: Optional[float]) -> Optional[int]:
    if index is None or not round_obj.is_ratable():
        return None
    return course_handicap(index, round_obj.get_slope(), round_obj.get_rating(), round_obj.course_par)


def build_handicap_report(
    rounds: List[Round],
    settings: Optional[HandicapSettings] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Current index, history, trend, low index, potential and counting rounds.

    Course and playing handicaps are for the tee of the most recent round.
    Each counting round carries its adjusted gross score at the current
    course handicap (None without hole scores).
    """
    require_rounds(rounds, "build_handicap_report")
    settings = settings or DEFAULT_SETTINGS

    history = compute_history(rounds, settings)
    current = history[-1].index if history else None
    counting = counting_rounds(rounds, settings)

    latest_course_handicap = None
    if rounds:
        latest = sort_chronologically(rounds)[-1]
        latest_course_handicap = _course_handicap_for(latest, current)

    return {
        "current_index": current,
        "history": history,
        "trend": classify_trend(history, settings),
        "low_index": low_index(history),
        "potential_index": project_potential(rounds, current, settings, today),
        "counting_rounds": [
            {
                "round_id": round_obj.id,
                "date": round_obj.date,
                "score": round_obj.total_score,
                "differential": differential,
                "adjusted_gross_score": adjusted_gross_score(
                    round_obj, _course_handicap_for(round_obj, current)
                ),
            }
            for round_obj, differential in counting
        ],
        "rounds_in_history": len(history),
        "course_handicap": latest_course_handicap,
        "playing_handicap": (
            playing_handicap(latest_course_handicap)
            if latest_course_handicap is not None else None
        ),
    }


def build_handicap_record(
    user_id: str,
    rounds: List[Round],
    previous: Optional[HandicapRecord] = None,
    settings: Optional[HandicapSettings] = None,
    today: Optional[date] = None,
) -> Optional[HandicapRecord]:
    """
    New handicap record after the player's rounds changed.

    The index is rounded to the precision it is stored at, so a `previous`
    read back from the database compares equal when nothing changed. Returns
    None when there is no index yet, or when the index is the same as in
    `previous`. The trend here compares record to record with no deadband,
    and the low index carries over from `previous`.
    """
    require_rounds(rounds, "build_handicap_record")
    settings = settings or DEFAULT_SETTINGS

    index = compute_index(rounds, settings)
    if index is None:
        logger.debug("no handicap index user_id=%s rounds=%s", user_id, len(rounds))
        return None
    index = round(index, STORED_INDEX_DECIMALS)

    trend = "stable"
    low = index
    if previous is not None:
        last = round(previous.handicap_index, STORED_INDEX_DECIMALS)
        if last == index:
            logger.debug("handicap index unchanged user_id=%s index=%s", user_id, index)
            return None
        trend = compare_indexes(index, last)
        low = min(index, round(previous.low_index, STORED_INDEX_DECIMALS))

    counting = counting_rounds(rounds, settings)
    return HandicapRecord(
        user_id=user_id,
        handicap_index=index,
        date=today or date.today(),
        included_rounds=[r.id for r, _ in counting if r.id is not None],
        differentials=[d for _, d in counting],
        trend=trend,
        low_index=low,
    )
