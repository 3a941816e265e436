"""Domain models for tracked time."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class TimeEntry:
    """A completed interval of work logged against an activity."""

    id: str
    activity: str
    description: str
    start_time: datetime
    end_time: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()


@dataclass(frozen=True, slots=True)
class InProgressEntry:
    activity: str
    description: str
    start_time: datetime


@dataclass(frozen=True, slots=True)
class TrackingDraft:
    """Activity and description pre-selected for the next tracking session."""

    activity: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class ChartDatum:
    activity: str
    percentage: float
    color: str


@dataclass(frozen=True, slots=True)
class TrackerState:
    """Everything a tracking session holds in memory.

    Instances are never mutated; every operation returns a new state.
    """

    activities: tuple[str, ...]
    daily_hours: int
    draft: TrackingDraft
    entries: tuple[TimeEntry, ...] = ()
    in_progress: Optional[InProgressEntry] = None
    editing: Optional[TimeEntry] = None

    @property
    def is_tracking(self) -> bool:
        return self.in_progress is not None

    def find_entry(self, entry_id: str) -> Optional[TimeEntry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None
