"""Ordered registry of activity names."""

from __future__ import annotations

import logging
from dataclasses import replace

from .models import TrackerState

logger = logging.getLogger(__name__)


def list_activities(state: TrackerState) -> tuple[str, ...]:
    return state.activities


def add_activity(state: TrackerState, name: str) -> TrackerState:
    """Append ``name`` to the registry.

    Surrounding whitespace is trimmed. Empty names and exact duplicates are
    ignored and the same state is returned.
    """
    cleaned = name.strip()
    if not cleaned:
        logger.debug("Ignoring empty activity name.")
        return state
    if cleaned in state.activities:
        logger.debug("Activity %r already registered.", cleaned)
        return state
    logger.debug("Registered activity %r.", cleaned)
    return replace(state, activities=state.activities + (cleaned,))
