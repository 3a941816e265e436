"""Time entry lifecycle: the start/stop state machine and in-place editing."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional

from .models import InProgressEntry, TimeEntry, TrackerState, TrackingDraft

logger = logging.getLogger(__name__)


class InvalidStateError(RuntimeError):
    """Raised when an operation is not legal in the current tracking state."""


class EntryNotFoundError(LookupError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f"No entry found for id={entry_id}")
        self.entry_id = entry_id


class UnknownActivityError(ValueError):
    def __init__(self, activity: str) -> None:
        super().__init__(f"Unknown activity {activity!r}")
        self.activity = activity


def start_tracking(
    state: TrackerState,
    activity: Optional[str] = None,
    description: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> TrackerState:
    """Open a new interval.

    Arguments left as ``None`` fall back to the held tracking draft. Starting
    while an interval is already open is rejected so the original start time
    is never lost.
    """
    if state.in_progress is not None:
        raise InvalidStateError("Already tracking; stop the current entry first.")
    activity = state.draft.activity if activity is None else activity
    description = state.draft.description if description is None else description
    _require_activity(state, activity)
    started_at = datetime.now() if now is None else now
    logger.info("Started tracking %r at %s.", activity, started_at.isoformat())
    return replace(
        state,
        draft=TrackingDraft(activity=activity, description=description),
        in_progress=InProgressEntry(
            activity=activity, description=description, start_time=started_at
        ),
    )


def stop_tracking(state: TrackerState, *, now: Optional[datetime] = None) -> TrackerState:
    """Close the open interval and append it to the completed entries."""
    current = state.in_progress
    if current is None:
        raise InvalidStateError("Not tracking; nothing to stop.")
    ended_at = datetime.now() if now is None else now
    entry = TimeEntry(
        id=uuid.uuid4().hex,
        activity=current.activity,
        description=current.description,
        start_time=current.start_time,
        end_time=ended_at,
    )
    logger.info(
        "Stopped tracking %r after %.0f seconds (entry %s).",
        entry.activity,
        entry.duration_seconds,
        entry.id,
    )
    return replace(
        state,
        entries=state.entries + (entry,),
        in_progress=None,
        draft=TrackingDraft(activity=state.activities[0]),
    )


def update_tracking_draft(
    state: TrackerState,
    activity: Optional[str] = None,
    description: Optional[str] = None,
) -> TrackerState:
    """Change what the next (or currently open) interval is logged against."""
    if activity is not None:
        _require_activity(state, activity)
    draft = TrackingDraft(
        activity=state.draft.activity if activity is None else activity,
        description=state.draft.description if description is None else description,
    )
    in_progress = state.in_progress
    if in_progress is not None:
        in_progress = replace(
            in_progress, activity=draft.activity, description=draft.description
        )
    return replace(state, draft=draft, in_progress=in_progress)


def update_entry(
    state: TrackerState,
    entry_id: str,
    *,
    activity: Optional[str] = None,
    description: Optional[str] = None,
    start_time: Optional[datetime] = None,
    end_time: Optional[datetime] = None,
) -> TrackerState:
    """Replace the given fields of a completed entry.

    Edited times are stored as given, even when ``end_time`` precedes
    ``start_time``.
    """
    if state.find_entry(entry_id) is None:
        raise EntryNotFoundError(entry_id)
    if activity is not None:
        _require_activity(state, activity)

    changes: dict[str, object] = {}
    if activity is not None:
        changes["activity"] = activity
    if description is not None:
        changes["description"] = description
    if start_time is not None:
        changes["start_time"] = start_time
    if end_time is not None:
        changes["end_time"] = end_time

    if not changes:
        return state
    entries = tuple(
        replace(entry, **changes) if entry.id == entry_id else entry
        for entry in state.entries
    )
    logger.debug("Updated entry %s: %s", entry_id, ", ".join(sorted(changes)))
    return replace(state, entries=entries)


def remove_entry(state: TrackerState, entry_id: str) -> TrackerState:
    entries = tuple(entry for entry in state.entries if entry.id != entry_id)
    if len(entries) == len(state.entries):
        logger.debug("Entry %s not present; nothing removed.", entry_id)
        return state
    logger.debug("Removed entry %s.", entry_id)
    return replace(state, entries=entries)


def begin_edit(state: TrackerState, entry_id: str) -> TrackerState:
    """Open an edit draft for ``entry_id``, dropping any other uncommitted draft."""
    entry = state.find_entry(entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    if state.editing is not None and state.editing.id != entry_id:
        logger.debug("Discarding uncommitted edit of entry %s.", state.editing.id)
    return replace(state, editing=entry)


def revise_edit(
    state: TrackerState,
    *,
    activity: Optional[str] = None,
    description: Optional[str] = None,
    start_time: Optional[datetime] = None,
    end_time: Optional[datetime] = None,
    start_clock: Optional[str] = None,
    end_clock: Optional[str] = None,
) -> TrackerState:
    """Change the edit draft without touching the stored entry.

    ``start_clock``/``end_clock`` take ``HH:MM`` and keep the draft's date.
    """
    draft = state.editing
    if draft is None:
        raise InvalidStateError("No entry is being edited.")
    if activity is not None:
        _require_activity(state, activity)
        draft = replace(draft, activity=activity)
    if description is not None:
        draft = replace(draft, description=description)
    if start_time is not None:
        draft = replace(draft, start_time=start_time)
    if end_time is not None:
        draft = replace(draft, end_time=end_time)
    if start_clock is not None:
        draft = replace(draft, start_time=with_clock_time(draft.start_time, start_clock))
    if end_clock is not None:
        draft = replace(draft, end_time=with_clock_time(draft.end_time, end_clock))
    return replace(state, editing=draft)


def commit_edit(state: TrackerState) -> TrackerState:
    """Write the edit draft back to its entry and leave edit mode."""
    draft = state.editing
    if draft is None:
        return state
    try:
        committed = update_entry(
            state,
            draft.id,
            activity=draft.activity,
            description=draft.description,
            start_time=draft.start_time,
            end_time=draft.end_time,
        )
    except EntryNotFoundError:
        logger.warning("Entry %s disappeared while being edited; dropping draft.", draft.id)
        return replace(state, editing=None)
    return replace(committed, editing=None)


def discard_edit(state: TrackerState) -> TrackerState:
    if state.editing is None:
        return state
    return replace(state, editing=None)


def with_clock_time(instant: datetime, clock: str) -> datetime:
    """Return ``instant`` on the same day with hour and minute taken from ``HH:MM``."""
    try:
        hours_text, minutes_text = clock.strip().split(":")
        hours, minutes = int(hours_text), int(minutes_text)
    except ValueError as exc:
        raise ValueError(f"Invalid clock time {clock!r}; expected HH:MM") from exc
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid clock time {clock!r}; expected HH:MM")
    return instant.replace(hour=hours, minute=minutes)


def _require_activity(state: TrackerState, activity: str) -> None:
    if activity not in state.activities:
        raise UnknownActivityError(activity)
