from .timer_state import TimerPhase, TimerState

__all__ = ["TimerPhase", "TimerState"]
