"""Habit entry repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import HabitEntry


class HabitEntryRepository(Protocol):
    """Store for daily habit entries, keyed by calendar date."""

    def get_entry(self, occurred_on: date) -> Optional[HabitEntry]:
        """Return the entry logged for ``occurred_on``, if any."""
        ...

    def entries_between(self, start_date: date, end_date: date) -> list[HabitEntry]:
        """Return entries in the inclusive range, ascending by date."""
        ...

    def upsert_entry(
        self, *, occurred_on: date, coding_level: int, doomscrolled: bool
    ) -> HabitEntry:
        """Insert the day's entry or overwrite the existing one."""
        ...
