"""Session history statistics, filters and export

Served by the /api/session stats, history and export routes and /api/settings/export.
"""
import json
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from focushero.models.session import Session
from focushero.models.settings import Settings
from focushero.utils.datetime_helper import day_bounds, ensure_utc, utc_now

# Sessions within this many seconds of a target length match the duration filter
DURATION_TOLERANCE_SECONDS = 60
EXPORT_VERSION = "1.0"


class SessionSummary(BaseModel):
    total_sessions: int
    total_focus_minutes: int
    average_session_minutes: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SessionHistory(BaseModel):
    """Filtered session history with its summary"""
    sessions: List[Session]
    summary: SessionSummary

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SessionStats(BaseModel):
    today_sessions: int
    today_focus_minutes: int
    total_focus_minutes: int
    current_streak: int
    daily_goal: int
    daily_goal_progress: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def today_sessions(sessions: Iterable[Session], now: Optional[datetime] = None) -> List[Session]:
    """Completed sessions that started today"""
    start, end = day_bounds(now)
    return [
        session for session in sessions
        if session.completed and start <= ensure_utc(session.start_time) < end
    ]


def total_focus_seconds(sessions: Iterable[Session]) -> int:
    return sum(session.duration for session in sessions if session.completed)


def current_streak(sessions: Iterable[Session], today: Optional[date] = None) -> int:
    """
    Number of consecutive days with at least one completed session.

    The streak ends today, or yesterday when nothing has been completed yet
    today, so an unfinished day does not break it.
    """
    today = today or utc_now().date()
    active_days = {
        ensure_utc(session.start_time).date() for session in sessions if session.completed
    }

    day = today if today in active_days else today - timedelta(days=1)
    streak = 0
    while day in active_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def daily_goal_progress(sessions: Iterable[Session], goal: int, now: Optional[datetime] = None) -> float:
    """Fraction of today's goal reached (may exceed 1.0)"""
    if goal <= 0:
        return 0.0
    return len(today_sessions(sessions, now)) / goal


def compute_stats(sessions: List[Session], settings: Settings, now: Optional[datetime] = None) -> SessionStats:
    now = ensure_utc(now) if now else utc_now()
    todays = today_sessions(sessions, now)
    return SessionStats(
        today_sessions=len(todays),
        today_focus_minutes=total_focus_seconds(todays) // 60,
        total_focus_minutes=total_focus_seconds(sessions) // 60,
        current_streak=current_streak(sessions, now.date()),
        daily_goal=settings.daily_goal,
        daily_goal_progress=daily_goal_progress(sessions, settings.daily_goal, now),
    )


def filter_sessions(
    sessions: Iterable[Session],
    period_days: Optional[int] = None,
    target_duration: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Session]:
    """
    Apply the history view filters.

    Args:
        sessions: Sessions to filter
        period_days: Keep sessions started within the last N days (None = all time)
        target_duration: Keep sessions within a minute of this length in seconds (None = all)
        now: Reference instant for the period filter
    """
    filtered = list(sessions)

    if period_days is not None:
        cutoff = (ensure_utc(now) if now else utc_now()) - timedelta(days=period_days)
        filtered = [session for session in filtered if ensure_utc(session.start_time) >= cutoff]

    if target_duration is not None:
        filtered = [
            session for session in filtered
            if abs(session.duration - target_duration) < DURATION_TOLERANCE_SECONDS
        ]

    return filtered


def summarize(sessions: List[Session]) -> SessionSummary:
    total = sum(session.duration for session in sessions)
    return SessionSummary(
        total_sessions=len(sessions),
        total_focus_minutes=total // 60,
        average_session_minutes=(total // len(sessions)) // 60 if sessions else 0,
    )


def export_sessions(sessions: Iterable[Session]) -> str:
    """Serialize sessions for download (without store identifiers)"""
    data = [
        session.model_dump(mode="json", by_alias=True, include={"start_time", "duration", "note", "completed"})
        for session in sessions
    ]
    return json.dumps(data, indent=2)


def export_settings(settings: Settings, now: Optional[datetime] = None) -> str:
    data = {
        "settings": settings.model_dump(mode="json", by_alias=True),
        "exportDate": (ensure_utc(now) if now else utc_now()).isoformat(),
        "version": EXPORT_VERSION,
    }
    return json.dumps(data, indent=2)
