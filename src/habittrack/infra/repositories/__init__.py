"""Repository implementations."""

from .habit import SQLModelHabitEntryRepository

__all__ = ["SQLModelHabitEntryRepository"]
