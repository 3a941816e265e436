from __future__ import annotations

import unittest

from timebudget.config import DEFAULT_ACTIVITIES, TrackerSettings
from timebudget.registry import add_activity, list_activities
from timebudget.state import initial_state


class RegistryTests(unittest.TestCase):
    def test_seed_list_in_order(self) -> None:
        state = initial_state()
        self.assertEqual(list_activities(state), DEFAULT_ACTIVITIES)
        self.assertEqual(state.draft.activity, "Calls")

    def test_add_appends_trimmed_name(self) -> None:
        state = add_activity(initial_state(), "  Reading  ")
        self.assertEqual(list_activities(state)[-1], "Reading")
        self.assertEqual(len(list_activities(state)), len(DEFAULT_ACTIVITIES) + 1)

    def test_add_is_idempotent(self) -> None:
        state = add_activity(initial_state(), "Reading")
        again = add_activity(state, " Reading ")
        self.assertIs(again, state)
        self.assertEqual(list_activities(again).count("Reading"), 1)

    def test_empty_name_is_ignored(self) -> None:
        state = initial_state()
        self.assertIs(add_activity(state, "   "), state)
        self.assertIs(add_activity(state, ""), state)

    def test_match_is_case_sensitive(self) -> None:
        state = add_activity(initial_state(), "calls")
        self.assertIn("calls", list_activities(state))
        self.assertIn("Calls", list_activities(state))

    def test_custom_seed(self) -> None:
        settings = TrackerSettings.from_options(activities=[" Deep work ", "Deep work", "", "Admin"])
        self.assertEqual(list_activities(initial_state(settings)), ("Deep work", "Admin"))


if __name__ == "__main__":
    unittest.main()
