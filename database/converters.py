"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the normalized DB schema
and the nested Pydantic models.
"""

import json
from typing import List, Optional
from uuid import UUID

from models import HandicapRecord, Hole, Round, RoundStats, TeeBox


def _float_or_none(value) -> Optional[float]:
    return float(value) if value is not None else None


def _json_list(value) -> list:
    """JSONB columns come back as text unless a codec is registered."""
    if value is None:
        return []
    if isinstance(value, str):
        return json.loads(value)
    return list(value)


# ================================================================
# Row -> Model (reads)
# ================================================================

def hole_from_row(row) -> Hole:
    """users.hole_scores row -> Hole model."""
    return Hole(
        number=row["hole_number"],
        par=row["par"],
        score=row["strokes"],
        putts=row["putts"],
        fairway_hit=row["fairway_hit"],
        green_in_regulation=bool(row["green_in_regulation"]),
        handicap=row["handicap"],
        penalties=row["penalties"] or 0,
    )


def tee_box_from_row(round_row) -> Optional[TeeBox]:
    """Tee columns on users.rounds -> TeeBox, or None when nothing about the tee was stored."""
    columns = ("tee_name", "tee_color", "tee_yardage", "tee_par", "course_rating", "slope_rating")
    if all(round_row[c] is None for c in columns):
        return None
    return TeeBox(
        name=round_row["tee_name"],
        color=round_row["tee_color"],
        yardage=round_row["tee_yardage"],
        par=round_row["tee_par"],
        # Zero ratings mean "unknown" in older rows.
        rating=float(round_row["course_rating"]) if round_row["course_rating"] else None,
        slope=float(round_row["slope_rating"]) if round_row["slope_rating"] else None,
    )


def round_stats_from_row(round_row) -> Optional[RoundStats]:
    """Stat columns on users.rounds -> RoundStats, or None when none were entered."""
    columns = (
        "fairways_hit", "fairways_total", "greens_in_regulation",
        "total_putts", "penalties", "average_driving_distance",
    )
    if all(round_row[c] is None for c in columns):
        return None
    return RoundStats(
        fairways_hit=round_row["fairways_hit"],
        fairways_total=round_row["fairways_total"],
        greens_in_regulation=round_row["greens_in_regulation"],
        total_putts=round_row["total_putts"],
        penalties=round_row["penalties"],
        average_driving_distance=_float_or_none(round_row["average_driving_distance"]),
    )


def round_from_rows(round_row, hole_rows: list) -> Round:
    """Assemble a Round from its users.rounds row and users.hole_scores rows."""
    hole_rows = sorted(hole_rows, key=lambda r: r["hole_number"])
    return Round(
        id=str(round_row["id"]),
        user_id=str(round_row["user_id"]),
        course_id=str(round_row["course_id"]) if round_row["course_id"] else None,
        course_name=round_row["course_name"],
        date=round_row["round_date"],
        total_score=round_row["total_score"],
        course_par=round_row["course_par"],
        tee_box=tee_box_from_row(round_row),
        holes=[hole_from_row(r) for r in hole_rows],
        stats=round_stats_from_row(round_row),
        is_completed=round_row["is_complete"],
        notes=round_row["notes"],
    )


def handicap_record_from_row(row) -> HandicapRecord:
    """users.handicap_records row -> HandicapRecord model."""
    return HandicapRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        handicap_index=float(row["handicap_index"]),
        date=row["record_date"],
        included_rounds=[str(r) for r in _json_list(row["included_rounds"])],
        differentials=[float(d) for d in _json_list(row["differentials"])],
        trend=row["trend"],
        low_index=float(row["low_index"]),
        created_at=row["created_at"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def handicap_record_to_row(record: HandicapRecord) -> tuple:
    """HandicapRecord -> tuple for users.handicap_records INSERT."""
    return (
        UUID(record.user_id),
        record.handicap_index,
        record.date,
        json.dumps(record.included_rounds),
        json.dumps(record.differentials),
        record.trend,
        record.low_index,
    )


def group_hole_rows(hole_rows: list) -> dict:
    """Bucket hole_scores rows fetched for several rounds by round_id."""
    grouped: dict = {}
    for row in hole_rows:
        grouped.setdefault(row["round_id"], []).append(row)
    return grouped


def rounds_from_rows(round_rows: list, hole_rows: list) -> List[Round]:
    """Assemble many rounds from one rounds query and one hole_scores query."""
    holes_by_round = group_hole_rows(hole_rows)
    return [round_from_rows(r, holes_by_round.get(r["id"], [])) for r in round_rows]
