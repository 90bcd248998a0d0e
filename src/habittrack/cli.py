"""Flask CLI commands for HabitTrack."""

from __future__ import annotations

from datetime import date

import click
from flask import current_app

from .domain.habits import DayState, HabitDimension
from .extensions import habit_repository
from .services.habits import (
    HabitValidationError,
    get_week_habits,
    parse_entry_date,
    save_habit_entry,
)
from .services.streaks import classify_week

_STATE_MARKS = {
    DayState.COMPLETED: "#",
    DayState.MISSED: "x",
    DayState.FUTURE: ".",
}


def _parse_date_option(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return parse_entry_date(value)
    except HabitValidationError as exc:
        raise click.BadParameter(str(exc)) from exc


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habittrack-log")
    @click.option("--coding-level", type=int, required=True, help="0 none, 1 light, 2 heavy")
    @click.option("--doomscrolled/--no-doomscrolled", default=False, help="Whether you doomscrolled")
    @click.option("--date", "entry_date", default=None, help="Entry date (yyyy-MM-dd), defaults to today")
    def habittrack_log(coding_level: int, doomscrolled: bool, entry_date: str | None) -> None:
        """Save (or overwrite) the entry for a day."""

        try:
            entry = save_habit_entry(
                habit_repository(),
                entry_date=_parse_date_option(entry_date),
                coding_level=coding_level,
                doomscrolled=doomscrolled,
            )
        except HabitValidationError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(
            f"Saved {entry.date.isoformat()}: coding_level={entry.coding_level} "
            f"doomscrolled={'yes' if entry.doomscrolled else 'no'}"
        )

    @app.cli.command("habittrack-week")
    @click.option(
        "--dimension",
        type=click.Choice([item.value for item in HabitDimension]),
        default=HabitDimension.CODING.value,
        show_default=True,
    )
    @click.option("--today", "today_raw", default=None, help="Reference date (yyyy-MM-dd)")
    def habittrack_week(dimension: str, today_raw: str | None) -> None:
        """Print the 7-day streak tracker."""

        today = _parse_date_option(today_raw)
        lookback = current_app.config["HABITTRACK_CONFIG"].LOOKBACK_DAYS
        history = get_week_habits(habit_repository(), today=today, lookback_days=lookback)
        tracker = classify_week(history, dimension, today, lookback_days=lookback)
        marks = "".join(_STATE_MARKS[state] for state in tracker.day_states)
        click.echo(f"{tracker.habit_name}: {marks}  ({tracker.summary})")
        click.echo(" ".join(state.value for state in tracker.day_states))

    @app.cli.command("habittrack-seed")
    @click.option("--days", type=int, default=90, show_default=True, help="Days of history to fill")
    @click.option("--seed", type=int, default=None, help="Random seed for repeatable data")
    @click.option("--force", is_flag=True, default=False, help="Overwrite days that already have entries")
    def habittrack_seed(days: int, seed: int | None, force: bool) -> None:
        """Seed demo history before today."""

        from .services.demo import run_demo_seed

        summary = run_demo_seed(
            habit_repository(), today=date.today(), days=days, seed=seed, force=force
        )
        click.echo(f"Seeded {summary.created} entries ({summary.skipped} existing days kept).")
