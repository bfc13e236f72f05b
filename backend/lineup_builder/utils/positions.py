"""Fixed field positions, indexed by field slot."""

from __future__ import annotations

from typing import NamedTuple, Optional


class FieldPosition(NamedTuple):
    id: int
    label: str
    name: str
    x: int  # diagram coordinates, percent of width
    y: int  # percent of height


POSITIONS: tuple[FieldPosition, ...] = (
    FieldPosition(0, "P", "Pitcher", 50, 63),
    FieldPosition(1, "C", "Catcher", 50, 78),
    FieldPosition(2, "1B", "First Base", 72, 72),
    FieldPosition(3, "2B", "Second Base", 65, 50),
    FieldPosition(4, "3B", "Third Base", 28, 72),
    FieldPosition(5, "SS", "Shortstop", 35, 50),
    FieldPosition(6, "LF", "Left Field", 15, 25),
    FieldPosition(7, "CF", "Center Field", 50, 15),
    FieldPosition(8, "RF", "Right Field", 85, 25),
)


def position_label(slot: Optional[int]) -> str:
    if slot is None or not 0 <= slot < len(POSITIONS):
        return ""
    return POSITIONS[slot].label
