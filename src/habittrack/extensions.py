"""Database and extension wiring for HabitTrack."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelHabitEntryRepository


def init_db(app: Flask) -> None:
    """Create the SQLModel engine for ``app`` and make sure tables exist."""

    config: BaseConfig = app.config["HABITTRACK_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)

    state = app.extensions.setdefault("habittrack", {})
    state["engine"] = engine
    state["session_factory"] = create_session_factory(engine)


def get_engine():
    """Return the engine bound to the current app."""

    state = current_app.extensions.get("habittrack", {})
    engine = state.get("engine")
    if engine is None:
        raise RuntimeError("Database engine not initialized")
    return engine


def habit_repository() -> SQLModelHabitEntryRepository:
    """Repository bound to the current app's session factory."""

    get_engine()
    return SQLModelHabitEntryRepository(current_app.extensions["habittrack"]["session_factory"])
