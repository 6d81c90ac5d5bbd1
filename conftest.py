from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from task_tracker.main import create_app
from task_tracker.services.tasks import TaskService
from task_tracker.store import TaskStore


class FakeClock:
    """Deterministic clock that moves forward one second per reading."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value

    def peek(self) -> datetime:
        return self.current


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def service(store) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def client(store) -> TestClient:
    return TestClient(create_app(store))
