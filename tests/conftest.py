"""Shared pytest fixtures for the dashboard API tests.

FakeDatabase stands in for psycopg2 at the connection level: it hands
LiveStore connections whose cursors record every statement and answer
with rows from a responder function.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from dashboard_api.cache import ViewCache
from dashboard_api.config import Settings
from dashboard_api.main import create_app
from dashboard_api.stores import FallbackStore, LiveStore

Responder = Callable[[str, Any], Any]


def normalize(sql: str) -> str:
    return " ".join(sql.split())


class FakeCursor:
    def __init__(self, database: FakeDatabase) -> None:
        self._database = database
        self._rows: list[dict] = []
        self.description = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        statement = normalize(sql)
        self._database.record(statement, params)
        rows = self._database.responder(statement, params)
        self._rows = list(rows) if rows is not None else []
        self.description = [("column",)] if rows is not None else None

    def fetchall(self):
        return self._rows


class FakeConnection:
    def __init__(self, database: FakeDatabase) -> None:
        self._database = database
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def cursor(self):
        return FakeCursor(self._database)

    def close(self):
        self.closed = True


class FakeDatabase:
    """Records statements; SELECTs answer with the responder's rows."""

    def __init__(self, responder: Responder | None = None) -> None:
        self.responder = responder or (lambda sql, params: None)
        self.statements: list[tuple[str, Any]] = []
        self.connections: list[FakeConnection] = []
        self._lock = threading.Lock()

    def record(self, statement: str, params: Any) -> None:
        with self._lock:
            self.statements.append((statement, params))

    def connect(self) -> FakeConnection:
        conn = FakeConnection(self)
        with self._lock:
            self.connections.append(conn)
        return conn


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url=None,
        revenue_delay_seconds=0.0,
        api_host="127.0.0.1",
        api_port=8000,
        log_level="WARNING",
    )


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def live_store(fake_db: FakeDatabase) -> LiveStore:
    return LiveStore("postgresql://test@localhost/test", connect=fake_db.connect)


@pytest.fixture
def fallback_store() -> FallbackStore:
    return FallbackStore()


@pytest.fixture
def view_cache(tmp_path) -> ViewCache:
    cache = ViewCache(tmp_path / "views")
    yield cache
    cache.close()


@pytest.fixture
def make_client(settings: Settings):
    def _make(store) -> TestClient:
        return TestClient(create_app(store=store, settings=settings))

    return _make


@pytest.fixture
def client(make_client, fallback_store: FallbackStore) -> TestClient:
    return make_client(fallback_store)
