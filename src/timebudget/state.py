"""Construction of tracker state and budget changes."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .config import TrackerSettings, validate_daily_hours
from .models import TrackerState, TrackingDraft

logger = logging.getLogger(__name__)


def initial_state(settings: Optional[TrackerSettings] = None) -> TrackerState:
    """Return an idle state with no entries, seeded from ``settings``."""
    settings = settings or TrackerSettings()
    activities = tuple(settings.activities)
    return TrackerState(
        activities=activities,
        daily_hours=settings.daily_hours,
        draft=TrackingDraft(activity=activities[0]),
    )


def set_daily_hours(state: TrackerState, hours: int) -> TrackerState:
    validate_daily_hours(hours)
    if hours == state.daily_hours:
        return state
    logger.info("Daily budget changed from %dh to %dh.", state.daily_hours, hours)
    return replace(state, daily_hours=hours)
