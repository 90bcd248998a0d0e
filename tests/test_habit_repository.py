"""Tests for the SQLModel habit entry repository."""

from __future__ import annotations

from datetime import date, timedelta

from sqlmodel import select

from habittrack.models import HabitEntry


class TestUpsertEntry:
    def test_upsert_creates_new_entry(self, repository):
        saved = repository.upsert_entry(occurred_on=date(2025, 1, 7), coding_level=2, doomscrolled=False)

        assert saved.date == date(2025, 1, 7)
        assert saved.coding_level == 2
        assert saved.doomscrolled is False
        assert saved.created_at is not None

    def test_upsert_updates_existing_entry(self, repository, db_session):
        day = date(2025, 1, 7)
        repository.upsert_entry(occurred_on=day, coding_level=1, doomscrolled=False)

        updated = repository.upsert_entry(occurred_on=day, coding_level=0, doomscrolled=True)

        assert updated.coding_level == 0
        assert updated.doomscrolled is True
        rows = db_session.exec(select(HabitEntry)).all()
        assert len(rows) == 1

    def test_upsert_refreshes_updated_at(self, repository):
        day = date(2025, 1, 7)
        first = repository.upsert_entry(occurred_on=day, coding_level=1, doomscrolled=False)
        second = repository.upsert_entry(occurred_on=day, coding_level=2, doomscrolled=False)

        assert second.updated_at >= first.updated_at

    def test_upsert_different_dates_creates_separate_entries(self, repository):
        today = date(2025, 1, 7)
        repository.upsert_entry(occurred_on=today, coding_level=1, doomscrolled=False)
        repository.upsert_entry(occurred_on=today - timedelta(days=1), coding_level=1, doomscrolled=False)

        assert len(repository.entries_between(today - timedelta(days=1), today)) == 2


class TestEntriesBetween:
    def test_empty_range(self, repository):
        assert repository.entries_between(date(2025, 1, 1), date(2025, 1, 31)) == []

    def test_range_is_inclusive(self, repository, entry_factory):
        base = date(2024, 1, 1)
        for offset in range(10):
            entry_factory(base + timedelta(days=offset))

        entries = repository.entries_between(date(2024, 1, 3), date(2024, 1, 7))

        assert len(entries) == 5
        assert entries[0].date == date(2024, 1, 3)
        assert entries[-1].date == date(2024, 1, 7)

    def test_entries_ordered_by_date(self, repository, entry_factory):
        for day in (date(2024, 1, 5), date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 2)):
            entry_factory(day)

        entries = repository.entries_between(date(2024, 1, 1), date(2024, 1, 31))

        assert [entry.date for entry in entries] == [
            date(2024, 1, 1),
            date(2024, 1, 2),
            date(2024, 1, 3),
            date(2024, 1, 5),
        ]


class TestGetEntry:
    def test_get_entry(self, repository, entry_factory):
        entry_factory(date(2025, 1, 7), coding_level=2, doomscrolled=True)

        found = repository.get_entry(date(2025, 1, 7))

        assert found is not None
        assert found.coding_level == 2
        assert repository.get_entry(date(2025, 1, 8)) is None
