"""API-specific response models for list views and aggregated data."""

from datetime import date
from pydantic import BaseModel
from typing import Dict, List, Optional

from models import HandicapIndexSnapshot, HandicapRecord, Trend


class RoundSummaryResponse(BaseModel):
    """Lightweight round for list views."""
    id: Optional[str] = None
    course_name: Optional[str] = None
    course_par: int
    tee_box: Optional[str] = None
    course_rating: Optional[float] = None
    slope_rating: Optional[float] = None
    date: date
    total_score: int
    to_par: int
    front_nine: Optional[int] = None
    back_nine: Optional[int] = None
    total_putts: Optional[int] = None
    total_gir: Optional[int] = None
    fairways_hit: Optional[int] = None
    notes: Optional[str] = None


# ================================================================
# Handicap
# ================================================================

class CountingRoundResponse(BaseModel):
    round_id: Optional[str] = None
    date: date
    score: int
    differential: float
    adjusted_gross_score: Optional[int] = None


class HandicapReportResponse(BaseModel):
    """Handicap index, its history and what drives it."""
    current_index: Optional[float] = None
    history: List[HandicapIndexSnapshot]
    trend: Trend
    low_index: Optional[float] = None
    potential_index: Optional[float] = None
    counting_rounds: List[CountingRoundResponse]
    rounds_in_history: int
    course_handicap: Optional[int] = None
    playing_handicap: Optional[int] = None


class RecalculateResponse(BaseModel):
    """Outcome of recomputing a user's handicap record."""
    updated: bool
    record: Optional[HandicapRecord] = None


# ================================================================
# Scoring
# ================================================================

class ScoreTrendPoint(BaseModel):
    date: date
    round_id: Optional[str] = None
    score: int
    par: int
    score_to_par: int


class ScoreBucket(BaseModel):
    score_to_par: int
    count: int
    percentage: float


class HoleGroupStats(BaseModel):
    """Aggregates for a group of holes (one hole number or one par type)."""
    holes_played: int
    average_score: Optional[float] = None
    average_score_to_par: Optional[float] = None
    fairway_hits: int
    fairway_attempts: int
    fairway_percentage: Optional[float] = None
    gir_hits: int
    gir_attempts: int
    gir_percentage: Optional[float] = None
    total_putts: int
    putts_recorded: int
    average_putts: Optional[float] = None
    score_types: Dict[str, int]


class HolePerformance(HoleGroupStats):
    hole_number: int
    par: int


class ParTypeStats(HoleGroupStats):
    par: int


class ScoringSummaryResponse(BaseModel):
    score_to_par_trend: List[ScoreTrendPoint]
    score_distribution: List[ScoreBucket]
    per_hole_performance: List[HolePerformance]
    per_par_type_stats: List[ParTypeStats]
    best_hole: Optional[HolePerformance] = None
    worst_hole: Optional[HolePerformance] = None
    skipped_holes: int


# ================================================================
# Overview
# ================================================================

class BestRound(BaseModel):
    id: Optional[str] = None
    score: int
    score_to_par: int
    course_name: Optional[str] = None
    date: date


class OverviewResponse(BaseModel):
    """Aggregated stats for the dashboard page."""
    total_rounds: int
    rounds_this_year: int
    average_score: Optional[float] = None
    scoring_trend: float
    best_round: BestRound
    fir_percentage: Optional[float] = None
    gir_percentage: Optional[float] = None
    putts_per_round: Optional[float] = None
    best_hole: Optional[HolePerformance] = None
    worst_hole: Optional[HolePerformance] = None
    handicap_index: Optional[float] = None
