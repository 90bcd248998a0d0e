"""Domain types shared by services and repositories."""

from .habits import DayState, HabitDimension, HabitRecord, as_date

__all__ = ["DayState", "HabitDimension", "HabitRecord", "as_date"]
