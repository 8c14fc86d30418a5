"""Round API endpoints."""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from typing import List, Optional
from uuid import UUID
from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db
from api.schemas import RoundSummaryResponse
from models import Round, RoundFilters

router = APIRouter()
logger = logging.getLogger(__name__)


def is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def summarize_round(r: Round) -> RoundSummaryResponse:
    """Project a full Round model into a lightweight summary."""
    stats = r.get_stats()
    return RoundSummaryResponse(
        id=r.id,
        course_name=r.course_name,
        course_par=r.course_par,
        tee_box=r.tee_box.name if r.tee_box else None,
        course_rating=r.get_rating(),
        slope_rating=r.get_slope(),
        date=r.date,
        total_score=r.total_score,
        to_par=r.score_to_par(),
        front_nine=r.calculate_front_nine(),
        back_nine=r.calculate_back_nine(),
        total_putts=stats.total_putts if stats else None,
        total_gir=stats.greens_in_regulation if stats else None,
        fairways_hit=stats.fairways_hit if stats else None,
        notes=r.notes,
    )


async def fetch_user_rounds(
    db: DatabaseManager, user_id: str, filters: Optional[RoundFilters] = None
) -> List[Round]:
    """Load a user's rounds oldest first, mapping bad ids and storage failures to HTTP errors."""
    if not is_uuid(user_id):
        raise HTTPException(422, f"Invalid user id: {user_id}")
    try:
        return await db.rounds.fetch_rounds(user_id, filters)
    except DatabaseError:
        logger.exception("loading rounds failed user_id=%s", user_id)
        raise HTTPException(500, "Could not load rounds")


@router.get("/user/{user_id}", response_model=List[RoundSummaryResponse])
async def get_rounds_for_user(
    user_id: str,
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    course_id: Optional[str] = Query(None),
    completed_only: bool = Query(True),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: DatabaseManager = Depends(get_db),
):
    """A user's rounds, newest first."""
    if course_id is not None and not is_uuid(course_id):
        raise HTTPException(422, f"Invalid course id: {course_id}")
    try:
        filters = RoundFilters(
            date_from=date_from,
            date_to=date_to,
            course_id=course_id,
            completed_only=completed_only,
            limit=limit,
            offset=offset,
        )
    except ValidationError as e:
        raise HTTPException(422, str(e))

    rounds = await fetch_user_rounds(db, user_id, filters)
    return [summarize_round(r) for r in reversed(rounds)]


@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    if not is_uuid(round_id):
        raise HTTPException(404, "Round not found")
    round_ = await db.rounds.get_round(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")
    return round_
