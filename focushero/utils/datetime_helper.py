"""Date/time and duration formatting helpers

format_time and format_duration are display helpers for timer and history
front ends; the server itself only uses the UTC helpers.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC value.

    Args:
        dt: datetime to normalize (naive values are treated as UTC)

    Returns:
        datetime: timezone-aware datetime in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_of_day(dt: datetime) -> datetime:
    """Midnight of the day `dt` falls on, in the same timezone"""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def day_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Return [today 00:00, tomorrow 00:00) for the day containing `now`.

    Args:
        now: reference instant (defaults to the current UTC time)
    """
    now = ensure_utc(now) if now else utc_now()
    today = start_of_day(now)
    return today, today + timedelta(days=1)


def format_time(seconds: int) -> str:
    """Format a countdown value as MM:SS, e.g. 1500 -> "25:00" """
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """
    Format a session length for display.

    Returns:
        str: "45s", "25m" or "25m 3s"
    """
    minutes, remaining = divmod(seconds, 60)
    if minutes == 0:
        return f"{remaining}s"
    if remaining == 0:
        return f"{minutes}m"
    return f"{minutes}m {remaining}s"
