"""Stats/dashboard API endpoints."""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

from analytics.config import HandicapSettings
from analytics.handicap import compute_index
from analytics.overview import overview_stats
from analytics.report import build_handicap_record, build_handicap_report
from analytics.stats import scoring_summary
from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db, get_handicap_settings
from api.routers.rounds import fetch_user_rounds, is_uuid
from api.schemas import (
    HandicapReportResponse,
    OverviewResponse,
    RecalculateResponse,
    ScoringSummaryResponse,
)
from models import HandicapRecord

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/handicap/{user_id}", response_model=HandicapReportResponse)
async def get_handicap(
    user_id: str,
    db: DatabaseManager = Depends(get_db),
    settings: HandicapSettings = Depends(get_handicap_settings),
):
    rounds = await fetch_user_rounds(db, user_id)
    return build_handicap_report(rounds, settings)


@router.get("/scoring/{user_id}", response_model=ScoringSummaryResponse)
async def get_scoring(user_id: str, db: DatabaseManager = Depends(get_db)):
    rounds = await fetch_user_rounds(db, user_id)
    return scoring_summary(rounds)


@router.get("/overview/{user_id}", response_model=OverviewResponse)
async def get_overview(
    user_id: str,
    db: DatabaseManager = Depends(get_db),
    settings: HandicapSettings = Depends(get_handicap_settings),
):
    rounds = await fetch_user_rounds(db, user_id)
    overview = overview_stats(rounds)
    if overview is None:
        raise HTTPException(404, "No rounds recorded")
    overview["handicap_index"] = compute_index(rounds, settings)
    return overview


@router.post("/handicap/{user_id}/recalculate", response_model=RecalculateResponse)
async def recalculate_handicap(
    user_id: str,
    db: DatabaseManager = Depends(get_db),
    settings: HandicapSettings = Depends(get_handicap_settings),
):
    """Store a new handicap record if the index moved since the last one."""
    rounds = await fetch_user_rounds(db, user_id)
    try:
        previous = await db.handicap_records.get_latest(user_id)
        record = build_handicap_record(user_id, rounds, previous, settings)
        if record is None:
            return RecalculateResponse(updated=False, record=previous)
        saved = await db.handicap_records.save_record(record)
    except DatabaseError:
        logger.exception("handicap recalculation failed user_id=%s", user_id)
        raise HTTPException(500, "Could not store handicap record")
    return RecalculateResponse(updated=True, record=saved)


@router.get("/handicap/{user_id}/records", response_model=List[HandicapRecord])
async def get_handicap_records(
    user_id: str,
    limit: int = Query(10, ge=1, le=100),
    db: DatabaseManager = Depends(get_db),
):
    if not is_uuid(user_id):
        raise HTTPException(422, f"Invalid user id: {user_id}")
    return await db.handicap_records.get_history(user_id, limit=limit)
