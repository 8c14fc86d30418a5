from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.hole import SCORE_TYPE_ORDER, Hole
from models.round import Round

from .exceptions import require_rounds
from .handicap import sort_chronologically

logger = logging.getLogger(__name__)

SUPPORTED_PARS = (3, 4, 5)


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> Optional[float]:
    """numerator / denominator, or None when there is nothing to divide by."""
    if not denominator:
        return None
    return numerator / denominator * scale


class _HoleAccumulator:
    """Running totals for a group of holes (one hole number, or one par type)."""

    def __init__(self) -> None:
        self.holes_played = 0
        self.total_score = 0
        self.total_to_par = 0
        self.fairway_hits = 0
        self.fairway_attempts = 0
        self.gir_hits = 0
        self.gir_attempts = 0
        self.total_putts = 0
        self.putts_recorded = 0
        self.score_types = {name: 0 for name in SCORE_TYPE_ORDER}
        self.pars: Counter = Counter()

    def add(self, hole: Hole) -> None:
        self.holes_played += 1
        self.total_score += hole.score
        self.total_to_par += hole.to_par()
        self.pars[hole.par] += 1

        # Fairways only count on par 4s and 5s; an unrecorded fairway is a miss.
        if hole.par >= 4:
            self.fairway_attempts += 1
            if hole.fairway_hit:
                self.fairway_hits += 1

        self.gir_attempts += 1
        if hole.green_in_regulation:
            self.gir_hits += 1

        if hole.putts is not None:
            self.total_putts += hole.putts
            self.putts_recorded += 1

        self.score_types[hole.get_score_type()] += 1

    def to_row(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "holes_played": self.holes_played,
            "average_score": _ratio(self.total_score, self.holes_played),
            "average_score_to_par": _ratio(self.total_to_par, self.holes_played),
            "fairway_hits": self.fairway_hits,
            "fairway_attempts": self.fairway_attempts,
            "fairway_percentage": _ratio(self.fairway_hits, self.fairway_attempts, 100.0),
            "gir_hits": self.gir_hits,
            "gir_attempts": self.gir_attempts,
            "gir_percentage": _ratio(self.gir_hits, self.gir_attempts, 100.0),
            "total_putts": self.total_putts,
            "putts_recorded": self.putts_recorded,
            "average_putts": _ratio(self.total_putts, self.putts_recorded),
        }
        row["score_types"] = dict(self.score_types)
        return row


def _supported_holes(rounds: Iterable[Round]) -> Iterable[Tuple[int, Hole]]:
    """(hole number, hole) for every hole whose par the aggregation understands."""
    for round_obj in rounds:
        for hole_number, hole in enumerate(round_obj.holes, start=1):
            if hole.par not in SUPPORTED_PARS:
                logger.debug(
                    "skipping hole round_id=%s hole=%s par=%s",
                    round_obj.id, hole_number, hole.par,
                )
                continue
            yield hole_number, hole


def count_skipped_holes(rounds: Iterable[Round]) -> int:
    """Holes left out of aggregation because their par is not 3, 4 or 5."""
    require_rounds(rounds, "count_skipped_holes")
    return sum(
        1
        for round_obj in rounds
        for hole in round_obj.holes
        if hole.par not in SUPPORTED_PARS
    )


def score_to_par_trend(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """Return total score and score to par by round, oldest first."""
    require_rounds(rounds, "score_to_par_trend")
    results: List[Dict[str, Any]] = []
    for round_obj in sort_chronologically(rounds):
        results.append(
            {
                "date": round_obj.date,
                "round_id": round_obj.id,
                "score": round_obj.total_score,
                "par": round_obj.course_par,
                "score_to_par": round_obj.score_to_par(),
            }
        )
    return results


def score_distribution(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """
    Histogram of round score to par.

    Output rows cover every integer from the best to the worst observed
    score to par, including empty buckets:
    - score_to_par
    - count: rounds in the bucket
    - percentage: share of all rounds (0-100)
    """
    require_rounds(rounds, "score_distribution")
    counts = Counter(round_obj.score_to_par() for round_obj in rounds)
    if not counts:
        return []

    total = sum(counts.values())
    return [
        {
            "score_to_par": score_to_par,
            "count": counts[score_to_par],
            "percentage": counts[score_to_par] / total * 100.0,
        }
        for score_to_par in range(min(counts), max(counts) + 1)
    ]


def per_hole_performance(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """
    Aggregate performance by hole number across rounds.

    A round contributes to hole N only if it recorded at least N holes.
    Rows are ordered by hole number and only exist for holes that were
    played. `par` is the par most often seen on that hole.
    """
    require_rounds(rounds, "per_hole_performance")
    by_hole: Dict[int, _HoleAccumulator] = {}
    for hole_number, hole in _supported_holes(rounds):
        by_hole.setdefault(hole_number, _HoleAccumulator()).add(hole)

    results: List[Dict[str, Any]] = []
    for hole_number in sorted(by_hole):
        acc = by_hole[hole_number]
        row = {"hole_number": hole_number, "par": acc.pars.most_common(1)[0][0]}
        row.update(acc.to_row())
        results.append(row)
    return results


def per_par_type_stats(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """
    Aggregate performance by hole par (3, 4, 5).

    Same fields as per_hole_performance, keyed by `par`. Par types that were
    never played are omitted.
    """
    require_rounds(rounds, "per_par_type_stats")
    by_par: Dict[int, _HoleAccumulator] = {}
    for _, hole in _supported_holes(rounds):
        by_par.setdefault(hole.par, _HoleAccumulator()).add(hole)

    results: List[Dict[str, Any]] = []
    for par in sorted(by_par):
        row: Dict[str, Any] = {"par": par}
        row.update(by_par[par].to_row())
        results.append(row)
    return results


def best_and_worst_hole(
    rounds: Iterable[Round],
    hole_rows: Optional[List[Dict[str, Any]]] = None,
) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
    """Holes with the lowest and highest average score to par; ties go to the lower hole number."""
    require_rounds(rounds, "best_and_worst_hole")
    if hole_rows is None:
        hole_rows = per_hole_performance(rounds)
    if not hole_rows:
        return None, None

    best = min(hole_rows, key=lambda row: (row["average_score_to_par"], row["hole_number"]))
    worst = min(hole_rows, key=lambda row: (-row["average_score_to_par"], row["hole_number"]))
    return best, worst


def scoring_summary(rounds: Iterable[Round]) -> Dict[str, Any]:
    """Everything the scoring dashboard shows, computed in one pass over the rounds."""
    require_rounds(rounds, "scoring_summary")
    rounds = list(rounds)
    hole_rows = per_hole_performance(rounds)
    best, worst = best_and_worst_hole(rounds, hole_rows)
    return {
        "score_to_par_trend": score_to_par_trend(rounds),
        "score_distribution": score_distribution(rounds),
        "per_hole_performance": hole_rows,
        "per_par_type_stats": per_par_type_stats(rounds),
        "best_hole": best,
        "worst_hole": worst,
        "skipped_holes": count_skipped_holes(rounds),
    }


def round_summary(round_obj: Round) -> Dict[str, Optional[float]]:
    """Compute summary metrics for a single round."""
    holes_played = len(round_obj.holes)
    stats = round_obj.get_stats()
    total_putts = stats.total_putts if stats else None
    total_gir = stats.greens_in_regulation if stats else None

    gir_percentage: Optional[float] = None
    putts_per_hole: Optional[float] = None
    if holes_played:
        gir_percentage = _ratio(total_gir, holes_played, 100.0) if total_gir is not None else None
        putts_per_hole = _ratio(total_putts, holes_played) if total_putts is not None else None

    return {
        "holes_played": float(holes_played),
        "total_strokes": float(round_obj.total_score),
        "score_to_par": float(round_obj.score_to_par()),
        "total_putts": float(total_putts) if total_putts is not None else None,
        "total_gir": float(total_gir) if total_gir is not None else None,
        "gir_percentage": gir_percentage,
        "putts_per_hole": putts_per_hole,
    }


def putts_per_round(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """Return putt totals by round for plotting/reporting."""
    require_rounds(rounds, "putts_per_round")
    results: List[Dict[str, Any]] = []
    for index, round_obj in enumerate(rounds, start=1):
        stats = round_obj.get_stats()
        results.append(
            {
                "round_index": index,
                "round_id": round_obj.id,
                "total_putts": stats.total_putts if stats else None,
                "holes_played": len(round_obj.holes),
            }
        )
    return results


def gir_per_round(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """Return GIR totals and percentage by round."""
    require_rounds(rounds, "gir_per_round")
    results: List[Dict[str, Any]] = []
    for index, round_obj in enumerate(rounds, start=1):
        stats = round_obj.get_stats()
        total_gir = stats.greens_in_regulation if stats else None
        holes_played = len(round_obj.holes) or 18  # stats-only rounds are full rounds
        gir_percentage: Optional[float] = None
        if total_gir is not None:
            gir_percentage = (total_gir / holes_played) * 100

        results.append(
            {
                "round_index": index,
                "round_id": round_obj.id,
                "total_gir": total_gir,
                "holes_played": len(round_obj.holes),
                "gir_percentage": gir_percentage,
            }
        )
    return results
