"""Command-line interface for the time budget tracker."""

from __future__ import annotations

import logging
from typing import List, Optional

import typer

from .colors import color_for
from .config import DEFAULT_DAILY_HOURS, MAX_DAILY_HOURS, MIN_DAILY_HOURS, TrackerSettings
from .server_runner import run_server

app = typer.Typer(help="Track time against activities and a daily hours budget.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(8765, "--port", min=1, max=65535, help="TCP port for the API."),
    daily_hours: int = typer.Option(
        DEFAULT_DAILY_HOURS,
        "--daily-hours",
        min=MIN_DAILY_HOURS,
        max=MAX_DAILY_HOURS,
        help="Hours in the daily budget.",
    ),
    activities: Optional[List[str]] = typer.Option(
        None,
        "--activity",
        "-a",
        help="Seed activity (repeatable). Defaults to the built-in list.",
    ),
) -> None:
    """Serve the JSON API for a single in-memory session."""
    settings = TrackerSettings.from_options(activities=activities, daily_hours=daily_hours)
    run_server(host=host, port=port, settings=settings)


@app.command()
def color(names: List[str] = typer.Argument(..., help="Activity names.")) -> None:
    """Print the display color assigned to each activity name."""
    for name in names:
        typer.echo(f"{color_for(name)}  {name}")


@app.command()
def track(
    activity: Optional[str] = typer.Option(
        None, "--activity", "-a", help="Activity to track. Defaults to the first seed."
    ),
    description: str = typer.Option("", "--description", "-d", help="What you are working on."),
    daily_hours: int = typer.Option(
        DEFAULT_DAILY_HOURS,
        "--daily-hours",
        min=MIN_DAILY_HOURS,
        max=MAX_DAILY_HOURS,
        help="Hours in the daily budget.",
    ),
) -> None:
    """Track one interval in the console and print the resulting breakdown."""
    from .reporting import BreakdownPrinter
    from .session import TrackerSession

    session = TrackerSession(TrackerSettings.from_options(daily_hours=daily_hours))
    if activity is not None:
        activity = activity.strip()
        if not activity:
            raise typer.BadParameter("activity must not be empty", param_hint="--activity")
        session.add_activity(activity)

    state = session.start(activity, description)
    typer.echo(f"Tracking {state.in_progress.activity!r}. Press Enter to stop.")
    typer.prompt("", default="", show_default=False, prompt_suffix="")
    state = session.stop()
    BreakdownPrinter().print_breakdown(session.breakdown, state.entries)
