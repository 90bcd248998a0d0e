"""Demo history seeding for local development."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, timedelta

from ..domain.repositories import HabitEntryRepository
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class SeedSummary:
    created: int
    skipped: int


def run_demo_seed(
    repository: HabitEntryRepository,
    *,
    today: date,
    days: int = 90,
    seed: int | None = None,
    force: bool = False,
) -> SeedSummary:
    """Fill the ``days`` before ``today`` with plausible entries.

    Days that already have an entry are left alone unless ``force`` is set.
    Today itself is never seeded so the daily prompt still shows.
    """
    rng = random.Random(seed)
    start = today - timedelta(days=days)
    existing = {entry.date for entry in repository.entries_between(start, today)}

    created = skipped = 0
    for offset in range(days, 0, -1):
        day = today - timedelta(days=offset)
        if day in existing and not force:
            skipped += 1
            continue
        # Skip roughly one day in eight to leave gaps in the streaks.
        if rng.random() < 0.125:
            continue
        repository.upsert_entry(
            occurred_on=day,
            coding_level=rng.choices((0, 1, 2), weights=(2, 5, 3))[0],
            doomscrolled=rng.random() < 0.3,
        )
        created += 1

    logger.info("Seeded demo history", extra={"created_count": created, "skipped_count": skipped})
    return SeedSummary(created=created, skipped=skipped)


__all__ = ["SeedSummary", "run_demo_seed"]
