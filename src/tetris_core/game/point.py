from __future__ import annotations

from typing import NamedTuple, Union


class Point(NamedTuple):
    """Integer board coordinate. y grows upward, row 0 is the bottom row."""

    x: int
    y: int

    def translate(self, dx: Union[int, "Point"], dy: int = 0) -> "Point":
        if isinstance(dx, Point):
            return Point(self.x + dx.x, self.y + dx.y)
        return Point(self.x + dx, self.y + dy)
