"""Service module exports."""

from . import demo, habits, heatmap, streaks

__all__ = ["demo", "habits", "heatmap", "streaks"]
