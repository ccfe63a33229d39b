from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .pieces import TetrominoType
from .point import Point


class PlacementError(ValueError):
    """Raised when cells are frozen onto occupied or off-board positions."""


class GameGrid:
    """Fixed-size board of frozen cells.

    The grid uses 0 for empty cells and the `TetrominoType` value for filled
    cells. It is indexed ``[y, x]`` with row 0 at the bottom, so row ``y`` of
    the array is board row ``y``.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self.grid = np.zeros((self._height, self._width), dtype=np.int8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, point: Point) -> bool:
        return 0 <= point.x < self._width and 0 <= point.y < self._height

    def is_empty(self, point: Point) -> bool:
        # Off-board cells block movement like occupied ones.
        return self.is_inside(point) and self.grid[point.y, point.x] == 0

    def can_place(self, cells: Iterable[Point]) -> bool:
        return all(self.is_empty(cell) for cell in cells)

    def cell(self, point: Point) -> Optional[TetrominoType]:
        if not self.is_inside(point):
            return None
        value = int(self.grid[point.y, point.x])
        return TetrominoType(value) if value else None

    def freeze(self, cells: Iterable[Point], kind: TetrominoType) -> None:
        cells = tuple(cells)
        for cell in cells:
            if not self.is_empty(cell):
                raise PlacementError(f"Cannot freeze {kind.name} onto {tuple(cell)}")
        for x, y in cells:
            self.grid[y, x] = int(kind)

    def clear_full_rows(self) -> int:
        """Remove every full row at once and return how many were removed."""
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Surviving rows keep their order and settle at the bottom
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self._width), dtype=np.int8)
        self.grid = np.vstack((kept, new_rows))
        return num

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the rows, bottom row first."""
        state = self.grid.copy()
        state.flags.writeable = False
        return state

    def __str__(self) -> str:
        lines = []
        for row in self.grid[::-1]:
            lines.append("".join(TetrominoType(int(v)).name if v else "." for v in row))
        return "\n".join(lines)
