"""Daily habit entry table."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar

from sqlmodel import Field, SQLModel


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class HabitEntry(SQLModel, table=True):
    """One day's log: coding intensity and whether the user doomscrolled."""

    __tablename__: ClassVar[str] = "habit_tracking"

    # The calendar date is the natural key; saves upsert on it.
    date: dt.date = Field(primary_key=True)
    coding_level: int = Field(default=0, nullable=False)
    doomscrolled: bool = Field(default=False, nullable=False)
    created_at: dt.datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: dt.datetime = Field(default_factory=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "coding_level": self.coding_level,
            "doomscrolled": self.doomscrolled,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
