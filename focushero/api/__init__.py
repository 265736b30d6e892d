# API module exports
from focushero.api import health, motivation, sessions, settings
from focushero.api.base import api_router

__all__ = ["health", "motivation", "sessions", "settings", "api_router"]
