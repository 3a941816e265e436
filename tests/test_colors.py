from __future__ import annotations

import re
import unittest

from timebudget.colors import color_for

_COLOR_PATTERN = re.compile(r"^#[0-9A-F]{6}$")


def _to_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def _signed_fold(name: str) -> str:
    encoded = name.encode("utf-16-le", "surrogatepass")
    value = 0
    for index in range(0, len(encoded), 2):
        unit = int.from_bytes(encoded[index : index + 2], "little")
        shifted = _to_int32(_to_int32(value) << 5)
        value = unit + (shifted - value)
    return "#" + format(_to_int32(value) & 0x00FFFFFF, "06X")


class ColorTests(unittest.TestCase):
    def test_known_values(self) -> None:
        self.assertEqual(color_for(""), "#000000")
        self.assertEqual(color_for("a"), "#000061")
        self.assertEqual(color_for("ab"), "#000C21")

    def test_deterministic_and_well_formed(self) -> None:
        for name in ["Calls", "Emails", "Inspiration", "Project X", "x" * 500, "Café"]:
            first = color_for(name)
            self.assertEqual(first, color_for(name))
            self.assertRegex(first, _COLOR_PATTERN)

    def test_case_sensitive(self) -> None:
        self.assertNotEqual(color_for("Calls"), color_for("calls"))

    def test_matches_signed_32_bit_fold_for_long_names(self) -> None:
        for name in ["Project X", "Inspiration and deep work", "q" * 200, "Réunion ☎"]:
            self.assertEqual(color_for(name), _signed_fold(name))

    def test_folds_utf16_code_units(self) -> None:
        # U+1F600 is the surrogate pair D83D DE00.
        self.assertEqual(color_for("\U0001F600"), "#1B0D63")


if __name__ == "__main__":
    unittest.main()
