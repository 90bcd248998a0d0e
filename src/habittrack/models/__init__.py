"""SQLModel table exports."""

from .habit import HabitEntry

__all__ = ["HabitEntry"]
