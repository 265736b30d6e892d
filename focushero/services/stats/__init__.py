from .session_stats import (
    SessionHistory,
    SessionStats,
    SessionSummary,
    compute_stats,
    current_streak,
    daily_goal_progress,
    export_sessions,
    export_settings,
    filter_sessions,
    summarize,
    today_sessions,
    total_focus_seconds,
)

__all__ = [
    "SessionHistory",
    "SessionStats",
    "SessionSummary",
    "compute_stats",
    "current_streak",
    "daily_goal_progress",
    "export_sessions",
    "export_settings",
    "filter_sessions",
    "summarize",
    "today_sessions",
    "total_focus_seconds",
]
