"""Hold the live tracker state for a running process."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from . import entries, registry
from .aggregation import Breakdown, build_breakdown
from .config import TrackerSettings
from .models import TrackerState
from .state import initial_state, set_daily_hours

logger = logging.getLogger(__name__)

Transition = Callable[[TrackerState], TrackerState]


class TrackerSession:
    """Apply state transitions one at a time and keep the breakdown current.

    Each mutation runs under a lock and the breakdown is rebuilt from the
    resulting state before the lock is released, so readers never observe
    figures derived from a half-applied change.
    """

    def __init__(
        self,
        settings: Optional[TrackerSettings] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or TrackerSettings()
        self._clock = clock
        self._lock = threading.Lock()
        self._state = initial_state(self.settings)
        self._breakdown = build_breakdown(self._state)

    @property
    def state(self) -> TrackerState:
        with self._lock:
            return self._state

    @property
    def breakdown(self) -> Breakdown:
        with self._lock:
            return self._breakdown

    def snapshot(self) -> tuple[TrackerState, Breakdown]:
        with self._lock:
            return self._state, self._breakdown

    def apply(self, transition: Transition) -> TrackerState:
        """Run ``transition`` against the current state and store the result.

        Exceptions propagate and leave the stored state untouched.
        """
        with self._lock:
            new_state = transition(self._state)
            if new_state is not self._state:
                breakdown = build_breakdown(new_state)
                self._state = new_state
                self._breakdown = breakdown
            return new_state

    def add_activity(self, name: str) -> TrackerState:
        return self.apply(lambda state: registry.add_activity(state, name))

    def set_daily_hours(self, hours: int) -> TrackerState:
        return self.apply(lambda state: set_daily_hours(state, hours))

    def update_draft(
        self, activity: Optional[str] = None, description: Optional[str] = None
    ) -> TrackerState:
        return self.apply(
            lambda state: entries.update_tracking_draft(state, activity, description)
        )

    def start(
        self, activity: Optional[str] = None, description: Optional[str] = None
    ) -> TrackerState:
        return self.apply(
            lambda state: entries.start_tracking(
                state, activity, description, now=self._clock()
            )
        )

    def stop(self) -> TrackerState:
        return self.apply(lambda state: entries.stop_tracking(state, now=self._clock()))

    def update_entry(self, entry_id: str, **patch) -> TrackerState:
        return self.apply(lambda state: entries.update_entry(state, entry_id, **patch))

    def remove_entry(self, entry_id: str) -> TrackerState:
        return self.apply(lambda state: entries.remove_entry(state, entry_id))

    def begin_edit(self, entry_id: str) -> TrackerState:
        return self.apply(lambda state: entries.begin_edit(state, entry_id))

    def revise_edit(self, **patch) -> TrackerState:
        return self.apply(lambda state: entries.revise_edit(state, **patch))

    def commit_edit(self) -> TrackerState:
        return self.apply(entries.commit_edit)

    def discard_edit(self) -> TrackerState:
        return self.apply(entries.discard_edit)
