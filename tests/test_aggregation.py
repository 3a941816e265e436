from __future__ import annotations

import unittest
from dataclasses import replace
from datetime import datetime

from timebudget.aggregation import build_breakdown, entry_percentage, recompute, total_minutes
from timebudget.colors import color_for
from timebudget.config import DEFAULT_ACTIVITIES
from timebudget.models import TimeEntry
from timebudget.state import initial_state, set_daily_hours


def _entry(idx: int, activity: str, start: tuple[int, int], end: tuple[int, int]) -> TimeEntry:
    return TimeEntry(
        id=f"e{idx}",
        activity=activity,
        description="",
        start_time=datetime(2026, 3, 2, *start),
        end_time=datetime(2026, 3, 2, *end),
    )


class RecomputeTests(unittest.TestCase):
    def test_percentages_for_eight_hour_budget(self) -> None:
        entries = [
            _entry(1, "Calls", (10, 0), (10, 30)),
            _entry(2, "Emails", (11, 0), (11, 15)),
        ]
        chart = recompute(entries, DEFAULT_ACTIVITIES, 8)

        self.assertEqual([datum.activity for datum in chart], list(DEFAULT_ACTIVITIES))
        values = {datum.activity: datum.percentage for datum in chart}
        self.assertAlmostEqual(values["Calls"], 6.25)
        self.assertAlmostEqual(values["Emails"], 3.125)
        self.assertEqual(values["Inspiration"], 0)
        self.assertEqual(values["Project X"], 0)
        self.assertAlmostEqual(total_minutes(entries), 45.0)

    def test_no_clamping_over_budget(self) -> None:
        entries = [_entry(1, "Calls", (9, 0), (10, 30))]
        chart = recompute(entries, ["Calls"], 1)
        self.assertAlmostEqual(chart[0].percentage, 150.0)

    def test_sums_multiple_entries_per_activity(self) -> None:
        entries = [
            _entry(1, "Calls", (9, 0), (9, 24)),
            _entry(2, "Calls", (13, 0), (13, 24)),
        ]
        chart = recompute(entries, ["Calls"], 8)
        self.assertAlmostEqual(chart[0].percentage, 10.0)

    def test_negative_duration_pulls_percentage_down(self) -> None:
        entries = [
            _entry(1, "Calls", (10, 0), (11, 0)),
            _entry(2, "Calls", (12, 0), (11, 36)),
        ]
        chart = recompute(entries, ["Calls"], 6)
        self.assertAlmostEqual(chart[0].percentage, 36 / 360 * 100)
        self.assertAlmostEqual(total_minutes(entries), 36.0)

    def test_entries_for_unregistered_activity_only_count_in_total(self) -> None:
        entries = [_entry(1, "Other", (9, 0), (9, 30))]
        chart = recompute(entries, ["Calls"], 8)
        self.assertEqual(chart[0].percentage, 0)
        self.assertAlmostEqual(total_minutes(entries), 30.0)

    def test_colors_follow_activity(self) -> None:
        chart = recompute([], DEFAULT_ACTIVITIES, 8)
        for datum in chart:
            self.assertEqual(datum.color, color_for(datum.activity))

    def test_empty_entries(self) -> None:
        self.assertEqual(total_minutes([]), 0.0)

    def test_entry_percentage(self) -> None:
        self.assertAlmostEqual(entry_percentage(_entry(1, "Calls", (9, 0), (9, 48)), 8), 10.0)


class BreakdownTests(unittest.TestCase):
    def test_budget_change_is_reflected(self) -> None:
        state = replace(initial_state(), entries=(_entry(1, "Calls", (9, 0), (10, 0)),))
        self.assertAlmostEqual(build_breakdown(state).chart[0].percentage, 12.5)

        state = set_daily_hours(state, 4)
        breakdown = build_breakdown(state)
        self.assertEqual(breakdown.daily_hours, 4)
        self.assertAlmostEqual(breakdown.chart[0].percentage, 25.0)
        self.assertAlmostEqual(breakdown.total_minutes, 60.0)

    def test_budget_bounds(self) -> None:
        state = initial_state()
        for bad in [0, 25, -3]:
            with self.assertRaises(ValueError):
                set_daily_hours(state, bad)
        self.assertEqual(set_daily_hours(state, 1).daily_hours, 1)
        self.assertEqual(set_daily_hours(state, 24).daily_hours, 24)


if __name__ == "__main__":
    unittest.main()
