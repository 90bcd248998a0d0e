"""Habit routes."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from flask import abort, current_app, jsonify, request

from ...domain.habits import HabitDimension
from ...extensions import habit_repository
from ...logging_config import get_logger
from ...services.habits import (
    VIEW_MODES,
    HabitValidationError,
    build_view,
    get_week_habits,
    get_year_habits,
    parse_entry_date,
    save_habit_entry,
)
from ...services.heatmap import project_heatmap
from ...services.streaks import classify_week
from . import bp
from .forms import HabitEntryForm

logger = get_logger(__name__)


def _lookback_days() -> int:
    return current_app.config["HABITTRACK_CONFIG"].LOOKBACK_DAYS


def _resolve_today() -> date:
    """Reference date for the request; ``?today=`` overrides the wall clock."""

    raw = request.args.get("today", "").strip()
    if not raw:
        return date.today()
    try:
        return parse_entry_date(raw)
    except HabitValidationError as exc:
        abort(400, description=str(exc))


def _resolve_dimension(name: str) -> HabitDimension:
    try:
        return HabitDimension.parse(name)
    except ValueError:
        logger.warning("Unknown habit dimension requested", extra={"dimension": name})
        abort(404)


@bp.get("/")
def dashboard():
    """Weekly trackers or yearly heatmaps, depending on ``?view=``."""

    view = request.args.get("view", "weekly").strip().lower()
    if view not in VIEW_MODES:
        logger.warning("Unknown view mode requested", extra={"view": view})
        return (
            jsonify(
                {
                    "error": "invalid_view",
                    "message": f"Unknown view mode {view!r}; expected one of {', '.join(VIEW_MODES)}.",
                }
            ),
            400,
        )
    today = _resolve_today()
    payload = build_view(habit_repository(), view=view, today=today, lookback_days=_lookback_days())
    return jsonify(payload)


@bp.get("/weekly/<dimension>")
def weekly(dimension: str):
    """One weekly tracker."""

    habit = _resolve_dimension(dimension)
    today = _resolve_today()
    history = get_week_habits(habit_repository(), today=today, lookback_days=_lookback_days())
    tracker = classify_week(history, habit, today, lookback_days=_lookback_days())
    return jsonify(tracker.to_dict())


@bp.get("/heatmap/<dimension>")
def heatmap(dimension: str):
    """Heatmap cells for the current year."""

    habit = _resolve_dimension(dimension)
    today = _resolve_today()
    history = get_year_habits(habit_repository(), today=today)
    points = project_heatmap(history, habit)
    return jsonify(
        {
            "habit_name": habit.label,
            "points": [point.to_dict() for point in points],
        }
    )


@bp.post("/entries")
def submit_entry():
    """Save the daily entry from a form post or JSON body."""

    payload = request.get_json(silent=True) if request.is_json else request.form
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        logger.warning("Rejected habit entry body", extra={"body_type": type(payload).__name__})
        return (
            jsonify({"error": "invalid_entry", "errors": {"__root__": ["Expected a JSON object."]}}),
            400,
        )
    form, errors = HabitEntryForm.from_payload(payload)
    if form is None:
        logger.warning("Rejected habit entry", extra={"errors": errors})
        return jsonify({"error": "invalid_entry", "errors": errors}), 400

    try:
        entry = save_habit_entry(
            habit_repository(),
            entry_date=form.date,
            coding_level=form.coding_level,
            doomscrolled=form.doomscrolled,
        )
    except HabitValidationError as exc:
        key = exc.field or "__root__"
        return jsonify({"error": "invalid_entry", "errors": {key: [str(exc)]}}), 400

    return jsonify(entry.to_dict()), 201
