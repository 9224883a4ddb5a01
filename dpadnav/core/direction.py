"""
Navigation directions.

Values are plain strings so directions can be written as "up"/"down"
in configuration data and parsed by pydantic.
"""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Direction for spatial focus navigation."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> 'Direction':
        """Mirror direction (up<->down, left<->right)."""
        return _OPPOSITES[self]

    def __str__(self) -> str:
        return self.value


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}
