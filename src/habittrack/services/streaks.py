"""Weekly streak classification for the 7-day habit tracker.

The tracker renders seven slots. The first slot is the day the visible streak
began (never earlier than six days ago) and each following slot is the next
calendar day; slots that would fall after ``today`` are ``future``.

A streak is anchored on the most recent complete day and survives gaps of
fewer than ``MISS_LIMIT`` consecutive incomplete days. The third consecutive
miss is the last day drawn; after it the streak is over. A streak that ended
before yesterday is not shown at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..domain.habits import DayState, HabitDimension, HabitRecord, as_date

WINDOW_DAYS = 7
MISS_LIMIT = 3
LOOKBACK_DAYS = 100
# Oldest offset whose streak can still end inside the visible window.
RESTART_HORIZON = WINDOW_DAYS - 1 + MISS_LIMIT


@dataclass(slots=True, frozen=True)
class WeeklyHabitData:
    """Presentation-ready weekly tracker for one habit dimension."""

    habit_name: str
    day_states: tuple[DayState, ...]
    total_days: int = WINDOW_DAYS

    @property
    def completed_count(self) -> int:
        return sum(1 for state in self.day_states if state is DayState.COMPLETED)

    @property
    def missed_count(self) -> int:
        return sum(1 for state in self.day_states if state is DayState.MISSED)

    @property
    def has_active_streak(self) -> bool:
        return self.completed_count > 0

    @property
    def summary(self) -> str:
        return f"{self.completed_count} of last {self.total_days} days completed"

    def to_dict(self) -> dict:
        return {
            "habit_name": self.habit_name,
            "day_states": [state.value for state in self.day_states],
            "total_days": self.total_days,
            "summary": self.summary,
        }


def _index_history(
    history: Iterable[HabitRecord],
    dimension: HabitDimension,
    *,
    today: date,
    earliest: date,
) -> tuple[set[date], set[date]]:
    """Return (logged days, complete days) inside ``earliest..today``."""

    logged: set[date] = set()
    complete: set[date] = set()
    for entry in history:
        day = as_date(entry.date)
        if day > today or day < earliest:
            continue
        logged.add(day)
        # Duplicate dates count as complete if any copy is complete.
        if dimension.is_complete(entry):
            complete.add(day)
    return logged, complete


def _find_streak_start(complete: set[date], *, today: date, anchor: int, lookback: int) -> int:
    """Offset of the earliest complete day chained to ``anchor`` by short gaps."""

    start = anchor
    misses = 0
    for offset in range(anchor + 1, lookback + 1):
        if today - timedelta(days=offset) in complete:
            start = offset
            misses = 0
            continue
        misses += 1
        if misses >= MISS_LIMIT:
            break
    return start


def classify_week(
    history: Iterable[HabitRecord],
    dimension: HabitDimension | str,
    today: date,
    *,
    lookback_days: int = LOOKBACK_DAYS,
) -> WeeklyHabitData:
    """Classify the visible week of ``history`` for ``dimension``.

    Args:
        history: entries in any order; rows after ``today`` are ignored
        dimension: ``coding`` or ``doomscroll``
        today: reference date; never read from the wall clock here
        lookback_days: how far back to search for the streak

    Returns:
        WeeklyHabitData with exactly ``WINDOW_DAYS`` states, oldest first
    """
    dimension = HabitDimension.parse(dimension)
    today = as_date(today)
    lookback = max(lookback_days, WINDOW_DAYS + MISS_LIMIT)
    idle = WeeklyHabitData(dimension.label, (DayState.FUTURE,) * WINDOW_DAYS)

    logged, complete = _index_history(
        history, dimension, today=today, earliest=today - timedelta(days=lookback)
    )

    latest = next(
        (offset for offset in range(lookback + 1) if today - timedelta(days=offset) in complete),
        None,
    )
    if latest is None or latest >= WINDOW_DAYS:
        return idle
    # Every day after the latest completion is a miss, so the streak ends on
    # day latest - MISS_LIMIT; it is still shown if that is yesterday or later.
    if latest - MISS_LIMIT > 1:
        return idle

    start = _find_streak_start(complete, today=today, anchor=latest, lookback=lookback)
    # A streak begun yesterday right after an earlier streak ended within the
    # window is a restart; those get no grace for today.
    restarted = start == 1 and any(
        today - timedelta(days=offset) in complete
        for offset in range(start + MISS_LIMIT + 1, RESTART_HORIZON + 1)
    )
    # Yesterday done and nothing logged yet today: today is still open.
    today_pending = latest == 1 and today not in logged and not restarted

    states: list[DayState] = []
    misses = 0
    for offset in range(min(start, WINDOW_DAYS - 1), -1, -1):
        day = today - timedelta(days=offset)
        if misses >= MISS_LIMIT:
            states.append(DayState.FUTURE)
        elif day in complete:
            states.append(DayState.COMPLETED)
            misses = 0
        elif offset == 0 and today_pending:
            states.append(DayState.FUTURE)
        else:
            states.append(DayState.MISSED)
            misses += 1

    states.extend([DayState.FUTURE] * (WINDOW_DAYS - len(states)))
    return WeeklyHabitData(dimension.label, tuple(states))


def classify_all(
    history: Iterable[HabitRecord], today: date, *, lookback_days: int = LOOKBACK_DAYS
) -> dict[str, WeeklyHabitData]:
    """Weekly trackers for every dimension, keyed by dimension value."""

    entries = list(history)
    return {
        dimension.value: classify_week(entries, dimension, today, lookback_days=lookback_days)
        for dimension in HabitDimension
    }


__all__ = [
    "LOOKBACK_DAYS",
    "MISS_LIMIT",
    "RESTART_HORIZON",
    "WINDOW_DAYS",
    "WeeklyHabitData",
    "classify_all",
    "classify_week",
]
