"""Habit dimensions and derived day states."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Protocol


def as_date(value: date | str) -> date:
    """Normalise a date, datetime or ISO ``yyyy-MM-dd`` string to a date."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


class HabitRecord(Protocol):
    """Anything shaped like a daily entry (the SQLModel row or a plain record)."""

    date: date
    coding_level: int
    doomscrolled: bool


class DayState(str, Enum):
    """Rendered state of a single day in the weekly tracker."""

    COMPLETED = "completed"
    MISSED = "missed"
    FUTURE = "future"


class HabitDimension(str, Enum):
    """Which habit axis an entry is evaluated on."""

    CODING = "coding"
    DOOMSCROLL = "doomscroll"

    @property
    def label(self) -> str:
        if self is HabitDimension.CODING:
            return "Coding"
        return "No Doomscroll"

    def is_complete(self, entry: HabitRecord) -> bool:
        """Return True when ``entry`` satisfies this dimension's predicate."""

        if self is HabitDimension.CODING:
            return entry.coding_level > 0
        return not entry.doomscrolled

    def heatmap_value(self, entry: HabitRecord) -> int:
        """Numeric cell value; doomscroll is the raw flag (1 = doomscrolled)."""

        if self is HabitDimension.CODING:
            return int(entry.coding_level)
        return 1 if entry.doomscrolled else 0

    @classmethod
    def parse(cls, value: "HabitDimension | str") -> "HabitDimension":
        """Coerce a string such as ``"coding"`` into a dimension.

        Raises:
            ValueError: for unknown dimension names
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(item.value for item in cls)
            raise ValueError(f"Unknown habit dimension {value!r}; expected one of {choices}.") from exc


__all__ = ["DayState", "HabitDimension", "HabitRecord", "as_date"]
