from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

import numpy as np

from .point import Point


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class Rotation(IntEnum):
    R0 = 0
    R90 = 1
    R180 = 2
    R270 = 3

    def clockwise(self) -> "Rotation":
        return Rotation((self + 1) % 4)

    def counter_clockwise(self) -> "Rotation":
        return Rotation((self - 1) % 4)


Shape = np.ndarray
Cells = Tuple[Point, ...]


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    # Turns the whole box k quarter turns clockwise, empty cells included
    return np.rot90(shape, k, axes=(1, 0))


# Spawn orientation inside a square box, top row first. Rotating the whole
# box keeps every state inside the same footprint.
BASE_SHAPES = {
    TetrominoType.I: np.array(
        [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8
    ),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
}


def _offsets(shape: Shape) -> Cells:
    """Convert a top-row-first box into offsets from its bottom-left corner."""
    size = shape.shape[0]
    cells = []
    for row in range(size):
        for col in range(size):
            if shape[row, col]:
                cells.append(Point(col, size - 1 - row))
    return tuple(cells)


def _build_catalog() -> Mapping[Tuple[TetrominoType, Rotation], Cells]:
    table: Dict[Tuple[TetrominoType, Rotation], Cells] = {}
    for kind, base in BASE_SHAPES.items():
        for rotation in Rotation:
            cells = _offsets(_rot90(base, int(rotation)))
            assert len(cells) == 4, f"{kind.name} at {rotation.name} has {len(cells)} cells"
            table[(kind, rotation)] = cells
    return MappingProxyType(table)


SHAPE_CATALOG = _build_catalog()


def cells_for(kind: TetrominoType, rotation: Rotation) -> Cells:
    return SHAPE_CATALOG[(kind, rotation)]


def box_size(kind: TetrominoType) -> int:
    """Side length of the square box every rotation of `kind` lives in."""
    return int(BASE_SHAPES[kind].shape[0])


@dataclass(frozen=True)
class PieceSnapshot:
    """Immutable description of the falling piece handed to observers."""

    kind: TetrominoType
    rotation: Rotation
    cells: Cells


@dataclass(frozen=True)
class ActivePiece:
    kind: TetrominoType
    rotation: Rotation = Rotation.R0
    anchor: Point = Point(0, 0)

    def cells(self) -> Cells:
        return tuple(self.anchor.translate(offset) for offset in cells_for(self.kind, self.rotation))

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.kind, self.rotation, self.anchor.translate(dx, dy))

    def rotated(self, clockwise: bool = True) -> "ActivePiece":
        rotation = self.rotation.clockwise() if clockwise else self.rotation.counter_clockwise()
        return ActivePiece(self.kind, rotation, self.anchor)

    def snapshot(self) -> PieceSnapshot:
        return PieceSnapshot(self.kind, self.rotation, self.cells())
