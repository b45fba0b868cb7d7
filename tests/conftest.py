"""
- Spins up temp test DB (SQLite in memory)
- Provide a fixed, advanceable clock so "today" is always 19 Oct 2026 (puzzle #630)
- Provide a session factory, a SessionStore wired to it, and a client fixture
  (TestClient(app)) that already has the override applied.
"""
import os
import pytest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the app does NOT run dev-only startup hooks (e.g., auto-create tables against real DB)
os.environ.setdefault("APP_ENV", "test")

from daily_mastermind.db import Base
from daily_mastermind.main import app, get_sessions
from daily_mastermind.repository import SqlStorage
from daily_mastermind.store import SessionStore
from daily_mastermind import models  # noqa: F401

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

# 2026-10-19 is day 630 since launch; its secret is [3, 5, 5, 4]
TODAY = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
TODAY_SECRET = [3, 5, 5, 4]


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FailingStorage:
    """Storage that is never available (quota exceeded, DB down, ...)."""

    def __init__(self):
        self.writes = 0

    def get_item(self, key):
        raise OSError("storage unavailable")

    def set_item(self, key, value):
        self.writes += 1
        raise OSError("quota exceeded")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(TODAY)


@pytest.fixture(scope="session")
def engine():
    # StaticPool + check_same_thread=False lets Starlette's TestClient and SQLAlchemy
    # share ONE in-memory SQLite database across threads.
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(autouse=True)
def _clean_db(engine):
    """Stored results are committed, so wipe them before each test."""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM stored_items"))
    yield


@pytest.fixture
def sessions(session_factory, clock) -> SessionStore:
    return SessionStore(lambda owner: SqlStorage(session_factory, owner), clock=clock)


@pytest.fixture
def client(sessions):
    # Every request uses our SessionStore (fixed clock, SQLite in memory)
    app.dependency_overrides[get_sessions] = lambda: sessions
    yield TestClient(app)
    app.dependency_overrides.clear()
