"""Headline numbers for the stats dashboard."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Optional

from models.round import Round

from .exceptions import require_rounds
from .handicap import sort_chronologically
from .stats import best_and_worst_hole

RECENT_ROUNDS = 20
TREND_ROUNDS = 5


def _average(values) -> Optional[float]:
    values = list(values)
    return sum(values) / len(values) if values else None


def overview_stats(
    rounds: Iterable[Round],
    today: Optional[date] = None,
) -> Optional[Dict[str, Any]]:
    """
    Summary of a player's rounds.

    - average_score: mean total over the 20 most recent rounds
    - scoring_trend: mean of the last 5 rounds minus mean of the 5 before
      (0.0 until there are previous rounds to compare with; negative is better)
    - fir/gir percentages and putts per round come from round stats and are
      None when no round carries that stat
    """
    require_rounds(rounds, "overview_stats")
    rounds = list(rounds)
    if not rounds:
        return None
    today = today or date.today()

    newest_first = list(reversed(sort_chronologically(rounds)))
    recent = newest_first[:RECENT_ROUNDS]
    last_five = recent[:TREND_ROUNDS]
    previous_five = recent[TREND_ROUNDS:TREND_ROUNDS * 2]

    scoring_trend = 0.0
    if previous_five:
        scoring_trend = (
            _average(r.total_score for r in last_five)
            - _average(r.total_score for r in previous_five)
        )

    best = min(rounds, key=lambda r: r.score_to_par())

    fairways_hit = fairways_total = 0
    greens = greens_holes = 0
    putts_total = putts_rounds = 0
    for round_obj in rounds:
        stats = round_obj.get_stats()
        if stats is None:
            continue
        if stats.fairways_total:
            fairways_hit += stats.fairways_hit or 0
            fairways_total += stats.fairways_total
        if stats.greens_in_regulation is not None:
            greens += stats.greens_in_regulation
            greens_holes += len(round_obj.holes) or 18
        if stats.total_putts is not None:
            putts_total += stats.total_putts
            putts_rounds += 1

    best_hole, worst_hole = best_and_worst_hole(rounds)

    return {
        "total_rounds": len(rounds),
        "rounds_this_year": sum(1 for r in rounds if r.date.year == today.year),
        "average_score": _average(r.total_score for r in recent),
        "scoring_trend": scoring_trend,
        "best_round": {
            "id": best.id,
            "score": best.total_score,
            "score_to_par": best.score_to_par(),
            "course_name": best.course_name,
            "date": best.date,
        },
        "fir_percentage": fairways_hit / fairways_total * 100 if fairways_total else None,
        "gir_percentage": greens / greens_holes * 100 if greens_holes else None,
        "putts_per_round": putts_total / putts_rounds if putts_rounds else None,
        "best_hole": best_hole,
        "worst_hole": worst_hole,
    }
