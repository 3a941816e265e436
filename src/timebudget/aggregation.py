"""Derive percentage-of-budget figures from completed entries."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence

from .colors import color_for
from .models import ChartDatum, TimeEntry, TrackerState


@dataclass(frozen=True, slots=True)
class Breakdown:
    daily_hours: int
    chart: tuple[ChartDatum, ...]
    total_minutes: float


def entry_minutes(entry: TimeEntry) -> float:
    """Length of ``entry`` in minutes; negative if its times were edited out of order."""
    return entry.duration_seconds / 60.0


def entry_percentage(entry: TimeEntry, daily_hours: int) -> float:
    return entry_minutes(entry) / (daily_hours * 60) * 100


def total_minutes(entries: Iterable[TimeEntry]) -> float:
    return sum((entry_minutes(entry) for entry in entries), 0.0)


def recompute(
    entries: Iterable[TimeEntry],
    activities: Sequence[str],
    daily_hours: int,
) -> list[ChartDatum]:
    """Return one datum per activity, in registry order.

    Each value is the activity's summed minutes as a percentage of
    ``daily_hours``. Values above 100 are kept as they are.
    """
    minutes_by_activity: defaultdict[str, float] = defaultdict(float)
    for entry in entries:
        minutes_by_activity[entry.activity] += entry_minutes(entry)

    budget_minutes = daily_hours * 60
    return [
        ChartDatum(
            activity=activity,
            percentage=minutes_by_activity.get(activity, 0.0) / budget_minutes * 100,
            color=color_for(activity),
        )
        for activity in activities
    ]


def build_breakdown(state: TrackerState) -> Breakdown:
    return Breakdown(
        daily_hours=state.daily_hours,
        chart=tuple(recompute(state.entries, state.activities, state.daily_hours)),
        total_minutes=total_minutes(state.entries),
    )
