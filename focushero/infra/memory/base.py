"""Base repository with common in-memory CRUD operations"""
import threading
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)


class BaseRepository(Generic[T, CreateT]):
    """
    Base repository providing common storage operations.
    Rows live in a mutex-guarded map keyed by an auto-incrementing id,
    so a durable backend can replace it without touching callers.
    """

    def __init__(self, model_class: Type[T]):
        self._model_class = model_class
        self._rows: Dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert a stored dict to a domain model"""
        return self._model_class(**data)

    def _prepare(self, data: CreateT) -> Dict[str, Any]:
        """Turn a create model into the dict that gets stored (without id)"""
        return data.model_dump(exclude_unset=True)

    async def find_by_id(self, id: int) -> Optional[T]:
        """Find a single record by ID"""
        with self._lock:
            return self._rows.get(id)

    async def find_all(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """Find all records in insertion order with optional pagination"""
        with self._lock:
            rows = list(self._rows.values())

        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def find_where(self, predicate: Callable[[T], bool]) -> List[T]:
        """Find records matching a predicate"""
        with self._lock:
            return [row for row in self._rows.values() if predicate(row)]

    async def find_by_filters(self, filters: Dict[str, Any], limit: Optional[int] = None) -> List[T]:
        """Find records whose attributes equal the given filters"""
        rows = await self.find_where(
            lambda row: all(getattr(row, key, None) == value for key, value in filters.items())
        )
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def create(self, data: CreateT) -> T:
        """Create a new record and assign it the next ID"""
        values = self._prepare(data)
        with self._lock:
            record = self._to_model({**values, "id": self._next_id})
            self._rows[record.id] = record
            self._next_id += 1
        return record

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records matching filters"""
        if filters:
            return len(await self.find_by_filters(filters))
        with self._lock:
            return len(self._rows)

    def clear(self) -> None:
        """Drop every record and restart IDs at 1"""
        with self._lock:
            self._rows.clear()
            self._next_id = 1
