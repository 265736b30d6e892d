"""Settings store - a single slot holding the singleton settings record"""
import threading
from typing import Optional

from focushero.models.settings import Settings, SettingsUpdate


class SettingsStore:
    """Holds exactly one Settings record; updates merge into it"""

    def __init__(self, initial: Optional[Settings] = None):
        self._settings = initial
        self._lock = threading.Lock()

    async def get(self) -> Settings:
        """Get the singleton, creating a default-valued one if none exists"""
        with self._lock:
            if self._settings is None:
                self._settings = Settings()
            return self._settings

    async def update(self, data: SettingsUpdate) -> Settings:
        """Merge the provided fields into the singleton and return the result"""
        changes = data.model_dump(exclude_unset=True)
        with self._lock:
            current = self._settings or Settings()
            self._settings = current.model_copy(update=changes)
            return self._settings

    def clear(self) -> None:
        """Forget the record; the next get() recreates the defaults"""
        with self._lock:
            self._settings = None
