"""Domain models for the application"""
from .session import Session, SessionCreate
from .settings import Settings, SettingsUpdate, Theme
from .user import User, UserCreate

__all__ = [
    'Session', 'SessionCreate',
    'Settings', 'SettingsUpdate', 'Theme',
    'User', 'UserCreate',
]
