"""Settings domain model (singleton record)"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class Theme(str, Enum):
    """UI theme preference"""
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


DEFAULT_FOCUS_DURATION = 1500  # 25 minutes
DEFAULT_SHORT_BREAK_DURATION = 300  # 5 minutes
DEFAULT_LONG_BREAK_DURATION = 1800  # 30 minutes
DEFAULT_DAILY_GOAL = 4


class SettingsBase(BaseModel):
    """Settings fields with their defaults"""
    focus_duration: int = Field(DEFAULT_FOCUS_DURATION, gt=0)
    short_break_duration: int = Field(DEFAULT_SHORT_BREAK_DURATION, gt=0)
    long_break_duration: int = Field(DEFAULT_LONG_BREAK_DURATION, gt=0)
    daily_goal: int = Field(DEFAULT_DAILY_GOAL, gt=0)
    sound_notifications: bool = True
    browser_notifications: bool = False
    theme: Theme = Theme.LIGHT

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Settings(SettingsBase):
    """The singleton settings record"""
    id: int = 1


class SettingsUpdate(BaseModel):
    """Settings update model - all fields optional, none nullable"""
    focus_duration: Optional[int] = Field(None, gt=0)
    short_break_duration: Optional[int] = Field(None, gt=0)
    long_break_duration: Optional[int] = Field(None, gt=0)
    daily_goal: Optional[int] = Field(None, gt=0)
    sound_notifications: Optional[bool] = None
    browser_notifications: Optional[bool] = None
    theme: Optional[Theme] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Defaults are not validated, so this only fires for explicit nulls
        if value is None:
            raise ValueError("field may be omitted but not set to null")
        return value
