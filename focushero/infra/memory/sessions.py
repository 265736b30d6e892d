"""Session repository"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from focushero.models.session import Session, SessionCreate
from focushero.utils.datetime_helper import ensure_utc

from .base import BaseRepository


class SessionRepository(BaseRepository[Session, SessionCreate]):
    """Repository for focus session records (create and read only)"""

    def __init__(self):
        super().__init__(Session)

    def _prepare(self, data: SessionCreate) -> Dict[str, Any]:
        values = data.model_dump()
        values["start_time"] = ensure_utc(values["start_time"])
        values["note"] = data.note
        values["completed"] = data.completed if data.completed is not None else False
        return values

    @staticmethod
    def _newest_first(sessions: List[Session]) -> List[Session]:
        return sorted(sessions, key=lambda session: session.start_time, reverse=True)

    async def find_all(self, limit: Optional[int] = None, offset: int = 0) -> List[Session]:
        """Find all sessions ordered newest start time first"""
        sessions = self._newest_first(await super().find_all())
        sessions = sessions[offset:]
        if limit is not None:
            sessions = sessions[:limit]
        return sessions

    async def find_by_date_range(self, start_date: datetime, end_date: datetime) -> List[Session]:
        """Find sessions whose start time lies within [start_date, end_date]

        Args:
            start_date: Inclusive lower bound (naive values are treated as UTC)
            end_date: Inclusive upper bound (naive values are treated as UTC)

        Returns:
            Matching sessions ordered newest start time first
        """
        start_date = ensure_utc(start_date)
        end_date = ensure_utc(end_date)
        sessions = await self.find_where(
            lambda session: start_date <= session.start_time <= end_date
        )
        return self._newest_first(sessions)
