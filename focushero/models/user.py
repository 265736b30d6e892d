"""User domain model (placeholder, no auth flow)"""
from pydantic import BaseModel


class UserBase(BaseModel):
    """Base user fields"""
    username: str


class UserCreate(UserBase):
    """User creation model"""
    password: str


class User(UserBase):
    """Complete user model as stored"""
    id: int
    password: str
