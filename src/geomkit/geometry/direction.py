"""
Compass directions.

Angles follow the math convention (North = +y = pi/2, East = 0), independent
of whether the y axis points up or down on screen.
"""

from __future__ import annotations
from enum import Enum
import math
from typing import Optional

from .angle import Angle


class Cardinal(Enum):
    """The four cardinal directions."""
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    def angle(self) -> Angle:
        return Angle(_ANGLES[self.value])

    def to_direction(self) -> Direction:
        return Direction(self.value)

    def __neg__(self) -> Cardinal:
        return Cardinal(_OPPOSITE[self.value])


class Direction(Enum):
    """The eight compass directions."""
    NORTH = "north"
    NORTHEAST = "northeast"
    EAST = "east"
    SOUTHEAST = "southeast"
    SOUTH = "south"
    SOUTHWEST = "southwest"
    WEST = "west"
    NORTHWEST = "northwest"

    def angle(self) -> Angle:
        return Angle(_ANGLES[self.value])

    def to_cardinal(self) -> Optional[Cardinal]:
        """The matching cardinal, or None for the diagonals."""
        try:
            return Cardinal(self.value)
        except ValueError:
            return None

    def __neg__(self) -> Direction:
        return Direction(_OPPOSITE[self.value])


_ANGLES = {
    "east": 0.0,
    "northeast": math.pi / 4,
    "north": math.pi / 2,
    "northwest": 3 * math.pi / 4,
    "west": math.pi,
    "southwest": 5 * math.pi / 4,
    "south": 3 * math.pi / 2,
    "southeast": 7 * math.pi / 4,
}

_OPPOSITE = {
    "north": "south",
    "northeast": "southwest",
    "east": "west",
    "southeast": "northwest",
    "south": "north",
    "southwest": "northeast",
    "west": "east",
    "northwest": "southeast",
}
