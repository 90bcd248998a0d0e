"""Calendar heatmap projection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..domain.habits import HabitDimension, HabitRecord, as_date


@dataclass(slots=True, frozen=True)
class HeatmapPoint:
    date: date
    value: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "value": self.value}


def project_heatmap(
    history: Iterable[HabitRecord], dimension: HabitDimension | str
) -> list[HeatmapPoint]:
    """Map each entry to one heatmap cell, preserving input order.

    Coding cells carry the coding level (0-2). Doomscroll cells carry the raw
    flag, 1 when the user doomscrolled; inverting it for colouring is up to
    the renderer.
    """
    dimension = HabitDimension.parse(dimension)
    return [HeatmapPoint(as_date(entry.date), dimension.heatmap_value(entry)) for entry in history]


def prepare_heatmap_data(history: Iterable[HabitRecord]) -> dict[str, list[HeatmapPoint]]:
    entries = list(history)
    return {dimension.value: project_heatmap(entries, dimension) for dimension in HabitDimension}


__all__ = ["HeatmapPoint", "prepare_heatmap_data", "project_heatmap"]
