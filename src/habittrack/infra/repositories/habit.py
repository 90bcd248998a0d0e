"""SQLModel implementation of the habit entry repository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.habit import HabitEntry


class SQLModelHabitEntryRepository:
    """SQLModel-based habit entry repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_entry(self, occurred_on: date) -> Optional[HabitEntry]:
        """Get the entry for a specific day."""
        with self.session_factory() as session:
            obj = session.get(HabitEntry, occurred_on)
            if obj:
                session.expunge(obj)
            return obj

    def entries_between(self, start_date: date, end_date: date) -> list[HabitEntry]:
        """Get entries within an inclusive date range, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.date >= start_date)
                .where(HabitEntry.date <= end_date)
                .order_by(HabitEntry.date)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert_entry(
        self, *, occurred_on: date, coding_level: int, doomscrolled: bool
    ) -> HabitEntry:
        """Insert or update the entry for ``occurred_on``."""
        with self.session_factory() as session:
            entry = session.get(HabitEntry, occurred_on)
            if entry is None:
                entry = HabitEntry(
                    date=occurred_on,
                    coding_level=coding_level,
                    doomscrolled=doomscrolled,
                )
            else:
                entry.coding_level = coding_level
                entry.doomscrolled = doomscrolled
                entry.updated_at = datetime.now(timezone.utc)
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry
