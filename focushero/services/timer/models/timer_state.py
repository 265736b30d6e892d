"""Timer state models"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from focushero.models.settings import DEFAULT_FOCUS_DURATION


class TimerPhase(str, Enum):
    """Timer phase"""
    FOCUS = "focus"
    SHORT_BREAK = "short-break"
    LONG_BREAK = "long-break"


class TimerState(BaseModel):
    """Client-held timer state, persisted to the local key-value store"""
    phase: TimerPhase = TimerPhase.FOCUS
    current_time: int = Field(DEFAULT_FOCUS_DURATION, ge=0)  # seconds remaining
    duration: int = Field(DEFAULT_FOCUS_DURATION, ge=0)  # phase target length
    is_running: bool = False
    start_time: Optional[datetime] = None  # None until the phase is first started
    completed_sessions: int = Field(0, ge=0)  # focus completions only

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @model_validator(mode="after")
    def check_countdown(self) -> "TimerState":
        if self.current_time > self.duration:
            raise ValueError("current_time cannot exceed duration")
        return self
