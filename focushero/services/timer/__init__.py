from .durations import DEFAULT_DURATIONS, SESSIONS_BEFORE_LONG_BREAK, next_phase, resolve_duration
from .models.timer_state import TimerPhase, TimerState
from .notifier import Notifier, SoundPlayer, TerminalBellPlayer, fire_expiry_side_effects
from .state_store import (
    JsonFileStore,
    KeyValueStore,
    MemoryKeyValueStore,
    default_state_store,
    load_theme,
    load_timer_state,
    save_theme,
    save_timer_state,
)
from .ticker import TickerHandle, start_ticker
from .timer_manager import SessionStore, TimerStateMachine

__all__ = [
    "DEFAULT_DURATIONS",
    "SESSIONS_BEFORE_LONG_BREAK",
    "next_phase",
    "resolve_duration",
    "TimerPhase",
    "TimerState",
    "Notifier",
    "SoundPlayer",
    "TerminalBellPlayer",
    "fire_expiry_side_effects",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "default_state_store",
    "load_theme",
    "load_timer_state",
    "save_theme",
    "save_timer_state",
    "TickerHandle",
    "start_ticker",
    "SessionStore",
    "TimerStateMachine",
]
