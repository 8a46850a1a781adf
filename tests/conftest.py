"""Shared pytest fixtures for todo-service tests."""

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from todo_service.config import Settings
from todo_service.core.store import TodoStore
from todo_service.fastapi.app import create_app

START_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Deterministic clock advancing by a fixed step on every call."""

    def __init__(self, start: datetime = START_TIME, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


class RecordingErrorReporter:
    """Error reporter that keeps every captured event in memory."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    def capture_exception(
        self,
        exception: BaseException,
        *,
        tags: dict[str, str],
        extra: dict[str, Any],
    ) -> None:
        self.events.append({"exception": exception, "tags": tags, "extra": extra})


@pytest.fixture
def clock() -> FakeClock:
    """Return a fake clock starting at 2024-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TodoStore:
    """Return a fresh, empty store driven by the fake clock."""
    return TodoStore(clock=clock)


@pytest.fixture
def reporter() -> RecordingErrorReporter:
    """Return an error reporter that records events."""
    return RecordingErrorReporter()


@pytest.fixture
def settings() -> Settings:
    """Return settings tagged with the 'test' environment."""
    return Settings(environment="test")


@pytest.fixture
def app(store: TodoStore, settings: Settings, reporter: RecordingErrorReporter) -> FastAPI:
    """Build a FastAPI app around the per-test store."""
    return create_app(store, settings=settings, reporter=reporter)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Return a TestClient for the per-test app."""
    return TestClient(app)


@pytest.fixture
def create_todos(client: TestClient):
    """Create todos through the API and return their JSON bodies.

    Accepts any number of titles and returns the created records in order.
    """

    def _create(*titles: str) -> list[dict[str, Any]]:
        created = []
        for title in titles:
            response = client.post("/todos", json={"title": title})
            assert response.status_code == 201
            created.append(response.json())
        return created

    return _create
