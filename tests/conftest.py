# tests/conftest.py

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from task_tracker.config import Settings
from task_tracker.main import create_app
from task_tracker.service import TaskService
from task_tracker.store import TaskStore


class FakeClock:
    """
    Deterministic clock: every call returns a time one second later.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        self.now = self.now + timedelta(seconds=1)
        return self.now


class SequentialIds:
    """Id factory yielding task-0001, task-0002, ..."""

    def __init__(self) -> None:
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return f"task-{self.issued:04d}"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def service(store: TaskStore, ids: SequentialIds, clock: FakeClock) -> TaskService:
    return TaskService(store, id_factory=ids, clock=clock)


@pytest.fixture()
def client(service: TaskService) -> TestClient:
    settings = Settings(host="127.0.0.1", port=0, log_level="DEBUG", title="Test Tracker")
    return TestClient(create_app(service=service, settings=settings))


@pytest.fixture()
def valid_payload() -> dict:
    return {
        "title": "A",
        "description": "B",
        "category": "work",
        "priority": "high",
        "deadline": "2030-01-01T00:00:00Z",
    }
