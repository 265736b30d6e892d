"""Local key-value persistence for timer state and theme preference"""
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError

from focushero.config import FOCUSHERO_STATE_PATH
from focushero.models.settings import Theme
from .models.timer_state import TimerState

logger = logging.getLogger(__name__)

TIMER_STATE_KEY = "focushero-timer-state"
THEME_KEY = "focushero-theme"


class KeyValueStore(ABC):
    """String key-value storage that survives reloads"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store, mostly for tests and embedded use"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON object on disk, rewritten on each change"""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring state file {self._path}: expected a JSON object")
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self._path)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._data.clear()
        self._flush()


def default_state_store(path: Optional[str] = FOCUSHERO_STATE_PATH) -> KeyValueStore:
    """JSON file store at `path` when configured, otherwise an in-memory store"""
    if path:
        return JsonFileStore(path)
    return MemoryKeyValueStore()


def load_timer_state(store: KeyValueStore) -> Optional[TimerState]:
    """
    Load the last saved timer state.

    A restored timer is never running: there is no auto-resume across reloads.

    Returns:
        The saved state with is_running forced to False, or None if nothing
        usable was stored
    """
    raw = store.get(TIMER_STATE_KEY)
    if raw is None:
        return None

    try:
        state = TimerState.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Discarding invalid saved timer state: {e}")
        return None

    return state.model_copy(update={"is_running": False})


def save_timer_state(store: KeyValueStore, state: TimerState) -> None:
    store.set(TIMER_STATE_KEY, state.model_dump_json(by_alias=True))


def load_theme(store: KeyValueStore) -> Theme:
    """Saved theme preference, defaulting to light"""
    raw = store.get(THEME_KEY)
    try:
        return Theme(raw) if raw else Theme.LIGHT
    except ValueError:
        logger.warning(f"Unknown saved theme {raw!r}, using light")
        return Theme.LIGHT


def save_theme(store: KeyValueStore, theme: Theme) -> None:
    store.set(THEME_KEY, Theme(theme).value)
