"""Pytest configuration and shared fixtures for HabitTrack tests.

Provides an isolated SQLite database per test, a repository bound to it,
factories for habit entries, and a Flask app/client pointed at a temporary
data directory so tests never touch the real instance folder.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habittrack import create_app
from habittrack.infra.database import create_session_factory
from habittrack.infra.repositories import SQLModelHabitEntryRepository
from habittrack.models import HabitEntry

# Fixed reference date for pure classifier tests.
TODAY = date(2025, 1, 7)


@dataclass(frozen=True)
class Record:
    """Plain stand-in for a stored entry."""

    date: date
    coding_level: int = 1
    doomscrolled: bool = False


def days_ago(offset: int, coding_level: int = 1, doomscrolled: bool = False, *, today: date = TODAY) -> Record:
    return Record(today - timedelta(days=offset), coding_level, doomscrolled)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'habits.db'}", echo=False)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session for seeding rows directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Transactional session factory matching the application's own."""
    return create_session_factory(db_engine)


@pytest.fixture
def repository(session_factory) -> SQLModelHabitEntryRepository:
    return SQLModelHabitEntryRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def entry_factory(db_session):
    """Factory persisting HabitEntry rows.

    Returns:
        Callable: creates an entry for ``occurred_on`` with the given values
    """

    def _create_entry(
        occurred_on: date,
        coding_level: int = 1,
        doomscrolled: bool = False,
    ) -> HabitEntry:
        entry = HabitEntry(date=occurred_on, coding_level=coding_level, doomscrolled=doomscrolled)
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        return entry

    return _create_entry


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "app.db"
    monkeypatch.setenv("HABITTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HABITTRACK_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("HABITTRACK_DEV_MODE", "true")
    monkeypatch.delenv("HABITTRACK_LOOKBACK_DAYS", raising=False)
    return create_app("testing")


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def app_repository(app) -> SQLModelHabitEntryRepository:
    """Repository bound to the Flask app's database."""
    return SQLModelHabitEntryRepository(app.extensions["habittrack"]["session_factory"])
