"""
Axis-aligned rectangles in the shared scene coordinate space.

Y grows downward, as in screen coordinates: "up" means a smaller y.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Rect:
    """Scene rectangle."""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self) -> Tuple[float, float]:
        """Center point as (x, y)."""
        return (self.center_x, self.center_y)

    def is_valid(self) -> bool:
        """
        Check that the rect can take part in geometry.

        Non-finite coordinates and negative sizes are degenerate.
        A zero-sized rect is a point and still valid.
        """
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.width >= 0 and self.height >= 0
