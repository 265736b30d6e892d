from .base import BaseRepository
from .client import (
    MemoryStorage,
    get_session_repository,
    get_settings_store,
    get_storage,
    get_user_repository,
    reset_storage,
)
from .sessions import SessionRepository
from .settings import SettingsStore
from .users import UserRepository

__all__ = [
    "BaseRepository",
    "MemoryStorage",
    "SessionRepository",
    "SettingsStore",
    "UserRepository",
    "get_storage",
    "reset_storage",
    "get_session_repository",
    "get_settings_store",
    "get_user_repository",
]
