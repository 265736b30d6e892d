"""Focus session domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class SessionBase(BaseModel):
    """Base session fields for creation"""
    start_time: datetime
    duration: int = Field(..., ge=0)  # seconds
    note: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SessionCreate(SessionBase):
    """Session creation model - `completed` defaults to False in the store"""
    completed: Optional[bool] = None


class Session(SessionBase):
    """Complete session model as stored"""
    id: int
    completed: bool = False
