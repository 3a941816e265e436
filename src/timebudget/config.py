"""Configuration models and helpers for the time budget tracker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

MIN_DAILY_HOURS = 1
MAX_DAILY_HOURS = 24
DEFAULT_DAILY_HOURS = 8
DEFAULT_ACTIVITIES: tuple[str, ...] = ("Calls", "Emails", "Inspiration", "Project X")


def validate_daily_hours(hours: int) -> int:
    """Return ``hours`` if it is a whole number of hours within the budget range."""
    if isinstance(hours, bool) or not isinstance(hours, int):
        raise ValueError(f"daily hours must be an integer, got {hours!r}")
    if not MIN_DAILY_HOURS <= hours <= MAX_DAILY_HOURS:
        raise ValueError(
            f"daily hours must be between {MIN_DAILY_HOURS} and {MAX_DAILY_HOURS}, got {hours}"
        )
    return hours


@dataclass(slots=True)
class TrackerSettings:
    """Starting configuration for a tracking session."""

    activities: tuple[str, ...] = DEFAULT_ACTIVITIES
    daily_hours: int = DEFAULT_DAILY_HOURS

    def __post_init__(self) -> None:
        if not self.activities:
            raise ValueError("at least one activity is required")
        validate_daily_hours(self.daily_hours)

    @classmethod
    def from_options(
        cls,
        activities: Optional[Iterable[str]] = None,
        daily_hours: Optional[int] = None,
    ) -> "TrackerSettings":
        seeds: list[str] = []
        for name in activities or ():
            cleaned = name.strip()
            if cleaned and cleaned not in seeds:
                seeds.append(cleaned)
        return cls(
            activities=tuple(seeds) if seeds else DEFAULT_ACTIVITIES,
            daily_hours=DEFAULT_DAILY_HOURS if daily_hours is None else daily_hours,
        )
