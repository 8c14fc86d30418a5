from .config import HandicapSettings, get_settings
from .differentials import (
    adjusted_gross_score,
    apply_handicap_caps,
    compute_differential,
    course_handicap,
    exceptional_score_reduction,
    max_hole_score,
    playing_handicap,
    round_differential,
)
from .exceptions import AnalyticsError, RoundsRequiredError
from .handicap import (
    compute_history,
    compute_index,
    counting_rounds,
    differentials_to_use,
    low_index,
)
from .overview import overview_stats
from .potential import build_hypothetical_round, project_potential
from .report import build_handicap_record, build_handicap_report
from .stats import (
    best_and_worst_hole,
    gir_per_round,
    per_hole_performance,
    per_par_type_stats,
    putts_per_round,
    round_summary,
    score_distribution,
    score_to_par_trend,
    scoring_summary,
)
from .trend import classify_trend

__all__ = [
    "AnalyticsError",
    "HandicapSettings",
    "RoundsRequiredError",
    "adjusted_gross_score",
    "apply_handicap_caps",
    "best_and_worst_hole",
    "build_handicap_record",
    "build_handicap_report",
    "build_hypothetical_round",
    "classify_trend",
    "compute_differential",
    "compute_history",
    "compute_index",
    "counting_rounds",
    "course_handicap",
    "differentials_to_use",
    "exceptional_score_reduction",
    "get_settings",
    "gir_per_round",
    "low_index",
    "max_hole_score",
    "overview_stats",
    "per_hole_performance",
    "per_par_type_stats",
    "playing_handicap",
    "project_potential",
    "putts_per_round",
    "round_differential",
    "round_summary",
    "score_distribution",
    "score_to_par_trend",
    "scoring_summary",
]
