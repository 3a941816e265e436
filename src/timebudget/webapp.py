"""FastAPI application exposing the in-memory tracker as a JSON API."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, NaiveDatetime

from .aggregation import Breakdown, entry_percentage
from .colors import color_for
from .config import TrackerSettings
from .entries import EntryNotFoundError, InvalidStateError
from .models import TimeEntry, TrackerState
from .registry import list_activities as registered_activities
from .reporting import format_duration, format_minutes, format_percentage
from .session import TrackerSession

logger = logging.getLogger(__name__)


class ActivityPayload(BaseModel):
    name: str

    model_config = ConfigDict(extra="forbid")


class DraftPayload(BaseModel):
    activity: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class EntryUpdate(BaseModel):
    activity: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[NaiveDatetime] = None
    end_time: Optional[NaiveDatetime] = None

    model_config = ConfigDict(extra="forbid")


class EditRevision(EntryUpdate):
    start_clock: Optional[str] = None
    end_clock: Optional[str] = None


class BudgetPayload(BaseModel):
    daily_hours: int

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    settings: Optional[TrackerSettings] = None,
    session: Optional[TrackerSession] = None,
) -> FastAPI:
    """Instantiate the FastAPI application around a tracker session."""
    resolved_session = session or TrackerSession(settings)

    app = FastAPI(title="Time Budget", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.session = resolved_session

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        state = _session(request).state
        return {
            "tracking": state.is_tracking,
            "daily_hours": state.daily_hours,
            "entry_count": len(state.entries),
            "editing": state.editing.id if state.editing else None,
        }

    @app.get("/api/activities")
    def list_activities(request: Request) -> Dict[str, Any]:
        return _activities_payload(_session(request).state)

    @app.post("/api/activities")
    def add_activity(payload: ActivityPayload, request: Request) -> Dict[str, Any]:
        state = _session(request).add_activity(payload.name)
        return _activities_payload(state)

    @app.put("/api/tracking/draft")
    def update_draft(payload: DraftPayload, request: Request) -> Dict[str, Any]:
        with _translate_errors():
            state = _session(request).update_draft(payload.activity, payload.description)
        return _tracking_payload(state)

    @app.post("/api/tracking/start")
    def start_tracking(
        request: Request, payload: Optional[DraftPayload] = None
    ) -> Dict[str, Any]:
        payload = payload or DraftPayload()
        with _translate_errors():
            state = _session(request).start(payload.activity, payload.description)
        return _tracking_payload(state)

    @app.post("/api/tracking/stop")
    def stop_tracking(request: Request) -> Dict[str, Any]:
        with _translate_errors():
            state = _session(request).stop()
        payload = _tracking_payload(state)
        payload["entry"] = _entry_payload(state.entries[-1], state.daily_hours)
        return payload

    @app.get("/api/entries")
    def list_entries(request: Request) -> Dict[str, Any]:
        state, breakdown = _session(request).snapshot()
        return {
            "entries": [_entry_payload(entry, state.daily_hours) for entry in state.entries],
            "total_minutes": breakdown.total_minutes,
            "total_minutes_text": format_minutes(breakdown.total_minutes),
        }

    @app.patch("/api/entries/{entry_id}")
    def update_entry(entry_id: str, payload: EntryUpdate, request: Request) -> Dict[str, Any]:
        updates = payload.model_dump(exclude_unset=True)
        with _translate_errors():
            state = _session(request).update_entry(entry_id, **updates)
        entry = state.find_entry(entry_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="Entry not found")
        return _entry_payload(entry, state.daily_hours)

    @app.delete("/api/entries/{entry_id}")
    def remove_entry(entry_id: str, request: Request) -> Dict[str, Any]:
        state = _session(request).remove_entry(entry_id)
        return {
            "entries": [_entry_payload(entry, state.daily_hours) for entry in state.entries]
        }

    @app.post("/api/entries/{entry_id}/edit")
    def begin_edit(entry_id: str, request: Request) -> Dict[str, Any]:
        with _translate_errors():
            state = _session(request).begin_edit(entry_id)
        return _edit_payload(state)

    @app.patch("/api/edit")
    def revise_edit(payload: EditRevision, request: Request) -> Dict[str, Any]:
        updates = payload.model_dump(exclude_unset=True)
        with _translate_errors():
            state = _session(request).revise_edit(**updates)
        return _edit_payload(state)

    @app.post("/api/edit/commit")
    def commit_edit(request: Request) -> Dict[str, Any]:
        state = _session(request).commit_edit()
        return {
            "editing": None,
            "entries": [_entry_payload(entry, state.daily_hours) for entry in state.entries],
        }

    @app.delete("/api/edit")
    def discard_edit(request: Request) -> Dict[str, Any]:
        state = _session(request).discard_edit()
        return _edit_payload(state)

    @app.put("/api/budget")
    def set_budget(payload: BudgetPayload, request: Request) -> Dict[str, Any]:
        with _translate_errors():
            _session(request).set_daily_hours(payload.daily_hours)
        return _breakdown_payload(_session(request).breakdown)

    @app.get("/api/breakdown")
    def breakdown(request: Request) -> Dict[str, Any]:
        return _breakdown_payload(_session(request).breakdown)

    return app


def _session(request: Request) -> TrackerSession:
    return request.app.state.session


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except InvalidStateError as exc:
        logger.debug("Rejected request: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except EntryNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Entry not found") from exc
    except ValueError as exc:
        logger.debug("Rejected request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _activities_payload(state: TrackerState) -> Dict[str, Any]:
    return {
        "activities": [
            {"name": name, "color": color_for(name)} for name in registered_activities(state)
        ]
    }


def _tracking_payload(state: TrackerState) -> Dict[str, Any]:
    current = state.in_progress
    return {
        "tracking": current is not None,
        "draft": {
            "activity": state.draft.activity,
            "description": state.draft.description,
        },
        "in_progress": (
            {
                "activity": current.activity,
                "description": current.description,
                "start_time": current.start_time.isoformat(),
            }
            if current
            else None
        ),
    }


def _edit_payload(state: TrackerState) -> Dict[str, Any]:
    draft = state.editing
    return {
        "editing": _entry_payload(draft, state.daily_hours) if draft else None,
    }


def _entry_payload(entry: TimeEntry, daily_hours: int) -> Dict[str, Any]:
    percentage = entry_percentage(entry, daily_hours)
    return {
        "id": entry.id,
        "activity": entry.activity,
        "description": entry.description,
        "start_time": entry.start_time.isoformat(),
        "end_time": entry.end_time.isoformat(),
        "duration_seconds": entry.duration_seconds,
        "duration_text": format_duration(entry.duration_seconds),
        "percentage": percentage,
        "percentage_text": format_percentage(percentage),
        "color": color_for(entry.activity),
    }


def _breakdown_payload(breakdown: Breakdown) -> Dict[str, Any]:
    return {
        "daily_hours": breakdown.daily_hours,
        "chart": [
            {
                "activity": datum.activity,
                "percentage": datum.percentage,
                "percentage_text": format_percentage(datum.percentage),
                "color": datum.color,
            }
            for datum in breakdown.chart
        ],
        "total_minutes": breakdown.total_minutes,
        "total_minutes_text": format_minutes(breakdown.total_minutes),
    }
