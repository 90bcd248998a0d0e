"""Repository protocols."""

from .habit import HabitEntryRepository

__all__ = ["HabitEntryRepository"]
