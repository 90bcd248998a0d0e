"""Habit service: store reads, validated daily saves and view payloads."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Sequence

from ..domain.habits import HabitDimension, HabitRecord, as_date
from ..domain.repositories import HabitEntryRepository
from ..logging_config import get_logger
from ..models.habit import HabitEntry
from .heatmap import prepare_heatmap_data
from .streaks import LOOKBACK_DAYS, classify_all

logger = get_logger(__name__)

CODING_LEVELS = (0, 1, 2)
VIEW_MODES = ("weekly", "yearly")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class HabitValidationError(ValueError):
    """Raised when a daily entry is rejected before reaching the store."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def validate_coding_level(value: object) -> int:
    """Return ``value`` as an int in 0-2 or raise HabitValidationError."""

    if isinstance(value, bool) or value not in CODING_LEVELS:
        raise HabitValidationError(
            f"Invalid coding_level: {value}. Must be 0, 1, or 2.", field="coding_level"
        )
    return int(value)  # type: ignore[arg-type]


def parse_entry_date(value: date | str) -> date:
    """Accept a date or a strict ``yyyy-MM-dd`` string."""

    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not _DATE_PATTERN.match(text):
        raise HabitValidationError(
            f"Invalid date format: {value}. Must be yyyy-MM-dd.", field="date"
        )
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise HabitValidationError(f"Invalid date: {value}.", field="date") from exc


def week_window(today: date, *, lookback_days: int = LOOKBACK_DAYS) -> tuple[date, date]:
    """Date range the weekly tracker needs to resolve streak starts."""

    return today - timedelta(days=lookback_days), today


def year_window(today: date) -> tuple[date, date]:
    return date(today.year, 1, 1), today


def get_week_habits(
    repository: HabitEntryRepository, *, today: date, lookback_days: int = LOOKBACK_DAYS
) -> list[HabitEntry]:
    start, end = week_window(today, lookback_days=lookback_days)
    return repository.entries_between(start, end)


def get_year_habits(repository: HabitEntryRepository, *, today: date) -> list[HabitEntry]:
    start, end = year_window(today)
    return repository.entries_between(start, end)


def save_habit_entry(
    repository: HabitEntryRepository,
    *,
    entry_date: date | str,
    coding_level: object,
    doomscrolled: bool,
) -> HabitEntry:
    """Validate and upsert the entry for ``entry_date``.

    Raises:
        HabitValidationError: when the coding level or date is malformed
    """
    level = validate_coding_level(coding_level)
    occurred_on = parse_entry_date(entry_date)
    entry = repository.upsert_entry(
        occurred_on=occurred_on, coding_level=level, doomscrolled=bool(doomscrolled)
    )
    logger.info(
        "Saved habit entry",
        extra={"date": occurred_on.isoformat(), "coding_level": level, "doomscrolled": bool(doomscrolled)},
    )
    return entry


def needs_daily_entry(history: Sequence[HabitRecord], today: date) -> bool:
    """True when the latest entry (history is ascending by date) is not today's."""

    if not history:
        return True
    return as_date(history[-1].date) != today


def build_view(
    repository: HabitEntryRepository,
    *,
    view: str,
    today: date,
    lookback_days: int = LOOKBACK_DAYS,
) -> dict:
    """Assemble the JSON payload for the weekly or yearly dashboard.

    Raises:
        ValueError: for view modes other than ``weekly`` and ``yearly``
    """
    if view not in VIEW_MODES:
        raise ValueError(f"Unknown view mode {view!r}; expected one of {', '.join(VIEW_MODES)}.")

    if view == "weekly":
        history = get_week_habits(repository, today=today, lookback_days=lookback_days)
        trackers = classify_all(history, today, lookback_days=lookback_days)
        habits = {name: tracker.to_dict() for name, tracker in trackers.items()}
    else:
        history = get_year_habits(repository, today=today)
        heatmaps = prepare_heatmap_data(history)
        habits = {
            name: {
                "habit_name": HabitDimension(name).label,
                "points": [point.to_dict() for point in points],
            }
            for name, points in heatmaps.items()
        }

    return {
        "view": view,
        "today": today.isoformat(),
        "needs_entry": needs_daily_entry(history, today),
        "habits": habits,
    }


__all__ = [
    "CODING_LEVELS",
    "HabitValidationError",
    "VIEW_MODES",
    "build_view",
    "get_week_habits",
    "get_year_habits",
    "needs_daily_entry",
    "parse_entry_date",
    "save_habit_entry",
    "validate_coding_level",
    "week_window",
    "year_window",
]
