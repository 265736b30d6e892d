"""Focus session endpoints"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from focushero.infra.memory import SessionRepository, SettingsStore, get_session_repository, get_settings_store
from focushero.models.session import Session, SessionCreate
from focushero.services.stats import (
    SessionHistory,
    SessionStats,
    compute_stats,
    export_sessions,
    filter_sessions,
    summarize,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["sessions"])


@router.post("", response_model=Session, status_code=201)
async def create_session(
    request: SessionCreate,
    repo: SessionRepository = Depends(get_session_repository),
):
    """Record a focus session"""
    session = await repo.create(request)
    logger.info(f"Created session {session.id} ({session.duration}s)")
    return session


@router.get("", response_model=List[Session])
async def list_sessions(repo: SessionRepository = Depends(get_session_repository)):
    """List all sessions, newest first"""
    return await repo.find_all()


@router.get("/date-range", response_model=List[Session])
async def list_sessions_by_date_range(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    repo: SessionRepository = Depends(get_session_repository),
):
    """
    List sessions whose start time falls within [startDate, endDate].

    Both bounds are inclusive; results are newest first.

    Raises:
        400: startDate or endDate missing or not a valid date
    """
    if start_date is None or end_date is None:
        raise HTTPException(status_code=400, detail="Start date and end date are required")

    return await repo.find_by_date_range(start_date, end_date)


@router.get("/stats", response_model=SessionStats)
async def get_session_stats(
    now: Optional[datetime] = Query(None, description="Reference instant, defaults to the current time"),
    repo: SessionRepository = Depends(get_session_repository),
    settings_store: SettingsStore = Depends(get_settings_store),
):
    """Today's sessions, total focus time, streak and daily goal progress"""
    sessions = await repo.find_all()
    settings = await settings_store.get()
    return compute_stats(sessions, settings, now)


@router.get("/history", response_model=SessionHistory)
async def get_session_history(
    period_days: Optional[int] = Query(None, alias="periodDays", ge=1),
    target_duration: Optional[int] = Query(None, alias="targetDuration", ge=1),
    now: Optional[datetime] = Query(None),
    repo: SessionRepository = Depends(get_session_repository),
):
    """
    Sessions matching the history filters, newest first, with a summary.

    Args:
        periodDays: Keep sessions started within the last N days (omit for all time)
        targetDuration: Keep sessions within a minute of this length in seconds
        now: Reference instant for the period filter
    """
    sessions = filter_sessions(await repo.find_all(), period_days, target_duration, now)
    return SessionHistory(sessions=sessions, summary=summarize(sessions))


@router.get("/export")
async def export_session_history(
    period_days: Optional[int] = Query(None, alias="periodDays", ge=1),
    target_duration: Optional[int] = Query(None, alias="targetDuration", ge=1),
    now: Optional[datetime] = Query(None),
    repo: SessionRepository = Depends(get_session_repository),
):
    """Download the (filtered) session history as a JSON file"""
    sessions = filter_sessions(await repo.find_all(), period_days, target_duration, now)
    logger.info(f"Exporting {len(sessions)} sessions")
    return Response(
        content=export_sessions(sessions),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="focushero-sessions.json"'},
    )
