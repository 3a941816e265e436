"""Deterministic display colors for activity names."""

from __future__ import annotations

_MASK_32 = 0xFFFFFFFF
_MASK_24 = 0x00FFFFFF


def color_for(name: str) -> str:
    """Return a ``#RRGGBB`` color derived from ``name``.

    Folds the UTF-16 code units of the name as ``hash * 31 + unit`` with
    32-bit wraparound and keeps the low 24 bits. Case-sensitive; different
    names may share a color.
    """
    value = 0
    for unit in _utf16_units(name):
        value = (value * 31 + unit) & _MASK_32
    return f"#{value & _MASK_24:06X}"


def _utf16_units(value: str) -> list[int]:
    encoded = value.encode("utf-16-le", "surrogatepass")
    return [
        int.from_bytes(encoded[index : index + 2], "little")
        for index in range(0, len(encoded), 2)
    ]
