"""Helpers to launch the local JSON API."""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn

from .config import TrackerSettings
from .webapp import create_app


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    settings: Optional[TrackerSettings] = None,
    log_level: str = "info",
) -> None:
    """Start the FastAPI app with a fresh in-memory session."""
    app = create_app(settings=settings or TrackerSettings())

    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    logging.getLogger(__name__).info(
        "Serving time budget API on http://%s:%d (state is kept in memory only).",
        host,
        port,
    )
    uvicorn.run(app, host=host, port=port, log_level=log_level)
