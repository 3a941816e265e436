"""Display formatting and console output for breakdowns."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .aggregation import Breakdown, entry_percentage
from .models import TimeEntry

_ONE_DECIMAL = Decimal("0.1")


class BreakdownPrinter:
    """Render a human-readable breakdown in the console."""

    def print_breakdown(self, breakdown: Breakdown, entries: Iterable[TimeEntry] = ()) -> None:
        print(f"Daily budget: {breakdown.daily_hours}h")
        print("-" * 40)
        for datum in breakdown.chart:
            print(
                f"  {datum.activity:<20} {format_percentage(datum.percentage):>6}%  {datum.color}"
            )
        print(f"Total: {format_minutes(breakdown.total_minutes)} mins")

        entries = list(entries)
        if entries:
            print()
            print("Entries:")
            for entry in entries:
                label = entry.description or "(no description)"
                print(
                    f"  {entry.activity:<12} {label[:30]:<30} "
                    f"{entry.start_time.strftime('%H:%M:%S')} - {entry.end_time.strftime('%H:%M:%S')} "
                    f"({format_duration(entry.duration_seconds)}) "
                    f"({format_percentage(entry_percentage(entry, breakdown.daily_hours))}%)"
                )


def format_duration(seconds: float) -> str:
    """Format as ``{h}h {m}min {s}sec`` using floor division, without padding.

    Remainders keep the sign of ``seconds``, so a negative duration reads
    like ``-1h -2min -30sec``.
    """
    hours = math.floor(seconds / 3600)
    minutes = math.floor(math.fmod(seconds, 3600) / 60)
    secs = math.floor(math.fmod(seconds, 60))
    return f"{hours}h {minutes}min {secs}sec"


def format_percentage(value: float) -> str:
    return _one_decimal(value)


def format_minutes(value: float) -> str:
    return _one_decimal(value)


def _one_decimal(value: float) -> str:
    # Exact ties round away from zero: 6.25 -> "6.3".
    return str(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
