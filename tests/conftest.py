"""Shared test fixtures.

Every test gets a fresh in-memory storage singleton so records never leak
between tests.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from focushero.infra.memory import reset_storage
from focushero.main import app
from focushero.models.session import Session, SessionCreate

NOW = datetime(2024, 6, 15, 9, 0, 0, tzinfo=timezone.utc)


class RecordingSessionStore:
    """Session store double that keeps every create() call"""

    def __init__(self, fail: bool = False):
        self.created: list[SessionCreate] = []
        self.fail = fail

    async def create(self, data: SessionCreate) -> Session:
        if self.fail:
            raise ConnectionError("backend unreachable")
        self.created.append(data)
        return Session(
            id=len(self.created),
            start_time=data.start_time,
            duration=data.duration,
            note=data.note,
            completed=bool(data.completed),
        )


@pytest.fixture(autouse=True)
def fresh_storage():
    reset_storage()
    yield
    reset_storage()


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def session_store():
    return RecordingSessionStore()
