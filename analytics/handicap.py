"""Handicap index from a player's rounds.

The index averages the best differentials among the most recent rounds.
How many count depends on how many ratable rounds the window holds:

    ratable rounds   3-5  6-8  9-11  12-14  15-16  17-18  19  20
    differentials      1    2     3      4      5      6   7   8

History is rebuilt prefix by prefix, so each snapshot only ever sees rounds
played up to that point.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from models.handicap import HandicapIndexSnapshot
from models.round import Round

from .config import DEFAULT_SETTINGS, HandicapSettings
from .differentials import round_differential
from .exceptions import require_rounds

logger = logging.getLogger(__name__)

# (minimum ratable rounds, differentials used), checked top down.
COUNTING_DIFFERENTIALS: Tuple[Tuple[int, int], ...] = (
    (20, 8),
    (19, 7),
    (17, 6),
    (15, 5),
    (12, 4),
    (9, 3),
    (6, 2),
    (3, 1),
)


def differentials_to_use(available: int) -> int:
    """Number of lowest differentials averaged for `available` ratable rounds."""
    for minimum, count in COUNTING_DIFFERENTIALS:
        if available >= minimum:
            return count
    return 0


def sort_chronologically(rounds: Iterable[Round]) -> List[Round]:
    """Oldest first. Rounds on the same date keep the order they arrived in."""
    return sorted(rounds, key=lambda r: r.date)


def window_differentials(
    rounds_chronological: Sequence[Round],
    settings: HandicapSettings = DEFAULT_SETTINGS,
) -> List[Tuple[Round, float]]:
    """Ratable rounds among the most recent `window_size`, paired with their differentials.

    Rounds older than the window are dropped entirely, ratable or not.
    """
    window = rounds_chronological[-settings.window_size:]
    pairs: List[Tuple[Round, float]] = []
    for round_obj in window:
        differential = round_differential(round_obj)
        if differential is not None:
            pairs.append((round_obj, differential))
    return pairs


def _best_differentials(
    pairs: List[Tuple[Round, float]],
    settings: HandicapSettings,
) -> List[Tuple[Round, float]]:
    if len(pairs) < settings.minimum_rounds:
        return []
    count = differentials_to_use(len(pairs))
    # Stable sort: equal differentials keep chronological order.
    return sorted(pairs, key=lambda pair: pair[1])[:count]


def _index_from_best(
    best: List[Tuple[Round, float]],
    settings: HandicapSettings,
) -> Optional[float]:
    if not best:
        return None
    index = sum(d for _, d in best) / len(best)
    if settings.apply_bonus_for_excellence:
        index *= settings.bonus_for_excellence
    if settings.max_index is not None and index > settings.max_index:
        index = settings.max_index
    return index


def _index_for_chronological(
    rounds_chronological: Sequence[Round],
    settings: HandicapSettings,
) -> Optional[float]:
    pairs = window_differentials(rounds_chronological, settings)
    return _index_from_best(_best_differentials(pairs, settings), settings)


def compute_index(
    rounds: Iterable[Round],
    settings: Optional[HandicapSettings] = None,
) -> Optional[float]:
    """Handicap index for the given rounds, or None with too few ratable rounds."""
    require_rounds(rounds, "compute_index")
    settings = settings or DEFAULT_SETTINGS
    return _index_for_chronological(sort_chronologically(rounds), settings)


def compute_history(
    rounds: Iterable[Round],
    settings: Optional[HandicapSettings] = None,
) -> List[HandicapIndexSnapshot]:
    """One snapshot per round, oldest first, each using only rounds up to that point."""
    require_rounds(rounds, "compute_history")
    settings = settings or DEFAULT_SETTINGS
    ordered = sort_chronologically(rounds)

    history: List[HandicapIndexSnapshot] = []
    for position, round_obj in enumerate(ordered, start=1):
        history.append(
            HandicapIndexSnapshot(
                date=round_obj.date,
                index=_index_for_chronological(ordered[:position], settings),
                round_count_at_time=position,
            )
        )

    logger.debug(
        "handicap_history rounds=%s indexed=%s",
        len(history),
        sum(1 for snapshot in history if snapshot.index is not None),
    )
    return history


def counting_rounds(
    rounds: Iterable[Round],
    settings: Optional[HandicapSettings] = None,
) -> List[Tuple[Round, float]]:
    """The rounds whose differentials make up the current index, best first."""
    require_rounds(rounds, "counting_rounds")
    settings = settings or DEFAULT_SETTINGS
    pairs = window_differentials(sort_chronologically(rounds), settings)
    return _best_differentials(pairs, settings)


def low_index(history: Iterable[HandicapIndexSnapshot]) -> Optional[float]:
    """Lowest index reached in a history, or None if it never had one."""
    indexes = [snapshot.index for snapshot in history if snapshot.index is not None]
    return min(indexes) if indexes else None
