"""In-memory storage singleton"""
import logging
from typing import Optional

from .sessions import SessionRepository
from .settings import SettingsStore
from .users import UserRepository

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Bundles the in-memory stores owned by the server process"""

    def __init__(self):
        self.sessions = SessionRepository()
        self.settings = SettingsStore()
        self.users = UserRepository()


_storage: Optional[MemoryStorage] = None


def get_storage() -> MemoryStorage:
    """Get or create the storage singleton"""
    global _storage

    if _storage is None:
        _storage = MemoryStorage()
        logger.info("Initialized in-memory storage")

    return _storage


def reset_storage():
    """Reset the storage singleton (useful for testing)"""
    global _storage
    _storage = None


def get_session_repository() -> SessionRepository:
    return get_storage().sessions


def get_settings_store() -> SettingsStore:
    return get_storage().settings


def get_user_repository() -> UserRepository:
    return get_storage().users
