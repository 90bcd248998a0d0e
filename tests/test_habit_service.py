"""Tests for the habit service layer."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from conftest import TODAY, days_ago
from habittrack.services.habits import (
    HabitValidationError,
    build_view,
    get_week_habits,
    get_year_habits,
    needs_daily_entry,
    parse_entry_date,
    save_habit_entry,
    validate_coding_level,
    week_window,
    year_window,
)


class TestValidation:
    @pytest.mark.parametrize("level", [0, 1, 2])
    def test_valid_coding_levels(self, level):
        assert validate_coding_level(level) == level

    @pytest.mark.parametrize("level", [-1, 3, "1", None, True, 1.5])
    def test_invalid_coding_levels(self, level):
        with pytest.raises(HabitValidationError) as excinfo:
            validate_coding_level(level)
        assert excinfo.value.field == "coding_level"
        assert "Must be 0, 1, or 2" in str(excinfo.value)

    def test_parse_date(self):
        assert parse_entry_date("2025-01-07") == date(2025, 1, 7)
        assert parse_entry_date(date(2025, 1, 7)) == date(2025, 1, 7)

    @pytest.mark.parametrize("raw", ["2025-1-7", "07/01/2025", "", "2025-01-07T10:00", "2025-02-30"])
    def test_malformed_dates(self, raw):
        with pytest.raises(HabitValidationError) as excinfo:
            parse_entry_date(raw)
        assert excinfo.value.field == "date"

    def test_validation_error_is_value_error(self):
        assert issubclass(HabitValidationError, ValueError)


class TestSaveHabitEntry:
    def test_saves_and_upserts(self, repository):
        save_habit_entry(repository, entry_date="2025-01-07", coding_level=1, doomscrolled=False)
        saved = save_habit_entry(repository, entry_date="2025-01-07", coding_level=2, doomscrolled=True)

        assert saved.coding_level == 2
        assert saved.doomscrolled is True
        assert len(repository.entries_between(date(2025, 1, 1), date(2025, 1, 31))) == 1

    def test_rejects_before_touching_store(self, repository):
        with pytest.raises(HabitValidationError):
            save_habit_entry(repository, entry_date="2025-01-07", coding_level=5, doomscrolled=False)
        with pytest.raises(HabitValidationError):
            save_habit_entry(repository, entry_date="Jan 7", coding_level=1, doomscrolled=False)

        assert repository.entries_between(date(2025, 1, 1), date(2025, 1, 31)) == []

    def test_logs_saved_entry(self, repository, caplog):
        with caplog.at_level("INFO", logger="habittrack"):
            save_habit_entry(repository, entry_date=TODAY, coding_level=0, doomscrolled=False)

        assert any(record.getMessage() == "Saved habit entry" for record in caplog.records)


class TestWindows:
    def test_week_window_spans_lookback(self):
        assert week_window(TODAY, lookback_days=100) == (TODAY - timedelta(days=100), TODAY)

    def test_year_window_starts_jan_first(self):
        assert year_window(date(2025, 6, 15)) == (date(2025, 1, 1), date(2025, 6, 15))

    def test_get_week_habits_excludes_old_and_future(self, repository, entry_factory):
        entry_factory(TODAY - timedelta(days=101))
        entry_factory(TODAY - timedelta(days=3))
        entry_factory(TODAY + timedelta(days=1))

        history = get_week_habits(repository, today=TODAY, lookback_days=100)

        assert [entry.date for entry in history] == [TODAY - timedelta(days=3)]

    def test_get_year_habits(self, repository, entry_factory):
        entry_factory(date(2024, 12, 31))
        entry_factory(date(2025, 1, 1))
        entry_factory(date(2025, 1, 6))

        history = get_year_habits(repository, today=TODAY)

        assert [entry.date for entry in history] == [date(2025, 1, 1), date(2025, 1, 6)]


class TestNeedsDailyEntry:
    def test_empty_history_needs_entry(self):
        assert needs_daily_entry([], TODAY) is True

    def test_latest_entry_today(self):
        assert needs_daily_entry([days_ago(2), days_ago(0)], TODAY) is False

    def test_latest_entry_yesterday(self):
        assert needs_daily_entry([days_ago(2), days_ago(1)], TODAY) is True


class TestBuildView:
    def test_weekly_view(self, repository, entry_factory):
        entry_factory(TODAY - timedelta(days=1), coding_level=2, doomscrolled=True)

        payload = build_view(repository, view="weekly", today=TODAY)

        assert payload["view"] == "weekly"
        assert payload["today"] == "2025-01-07"
        assert payload["needs_entry"] is True
        assert payload["habits"]["coding"]["day_states"][:2] == ["completed", "future"]
        assert payload["habits"]["doomscroll"]["day_states"] == ["future"] * 7

    def test_yearly_view(self, repository, entry_factory):
        entry_factory(TODAY, coding_level=1, doomscrolled=True)

        payload = build_view(repository, view="yearly", today=TODAY)

        assert payload["needs_entry"] is False
        assert payload["habits"]["coding"] == {
            "habit_name": "Coding",
            "points": [{"date": "2025-01-07", "value": 1}],
        }
        assert payload["habits"]["doomscroll"]["points"] == [{"date": "2025-01-07", "value": 1}]

    def test_unknown_view(self, repository):
        with pytest.raises(ValueError):
            build_view(repository, view="monthly", today=TODAY)
