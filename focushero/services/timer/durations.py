"""Phase sequencing and duration resolution"""
from typing import Dict, Optional

from focushero.models.settings import (
    DEFAULT_FOCUS_DURATION,
    DEFAULT_LONG_BREAK_DURATION,
    DEFAULT_SHORT_BREAK_DURATION,
    Settings,
)
from .models.timer_state import TimerPhase

SESSIONS_BEFORE_LONG_BREAK = 4

DEFAULT_DURATIONS: Dict[TimerPhase, int] = {
    TimerPhase.FOCUS: DEFAULT_FOCUS_DURATION,
    TimerPhase.SHORT_BREAK: DEFAULT_SHORT_BREAK_DURATION,
    TimerPhase.LONG_BREAK: DEFAULT_LONG_BREAK_DURATION,
}


def resolve_duration(settings: Optional[Settings], phase: TimerPhase) -> int:
    """
    Resolve the authoritative length of a phase.

    Args:
        settings: Current settings record, or None when unavailable
        phase: Phase to resolve

    Returns:
        Duration in seconds
    """
    if settings is None:
        return DEFAULT_DURATIONS[phase]

    if phase == TimerPhase.SHORT_BREAK:
        return settings.short_break_duration
    if phase == TimerPhase.LONG_BREAK:
        return settings.long_break_duration
    return settings.focus_duration


def next_phase(phase: TimerPhase, completed_sessions: int) -> TimerPhase:
    """
    Phase that follows an expiring one.

    The long-break check counts the focus session that is just finishing,
    i.e. it uses `completed_sessions + 1` before the counter is incremented.
    """
    if phase != TimerPhase.FOCUS:
        return TimerPhase.FOCUS

    if (completed_sessions + 1) % SESSIONS_BEFORE_LONG_BREAK == 0:
        return TimerPhase.LONG_BREAK
    return TimerPhase.SHORT_BREAK
