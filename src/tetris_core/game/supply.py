from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from .pieces import TetrominoType


class RandomSupply:
    """Unbounded uniform stream of piece kinds."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.rng = random.Random(seed)

    def draw(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def reset(self) -> None:
        # An unseeded supply just keeps drawing fresh pieces
        if self.seed is not None:
            self.rng = random.Random(self.seed)


class SequenceSupply:
    """Fixed piece order, replayed from the start once exhausted."""

    def __init__(self, pieces: Iterable[TetrominoType]) -> None:
        self.pieces: List[TetrominoType] = [TetrominoType(p) for p in pieces]
        if not self.pieces:
            raise ValueError("Piece sequence must contain at least one piece")
        self._index = 0

    @property
    def sequence(self) -> Sequence[TetrominoType]:
        return tuple(self.pieces)

    def draw(self) -> TetrominoType:
        piece = self.pieces[self._index]
        self._index = (self._index + 1) % len(self.pieces)
        return piece

    def reset(self) -> None:
        self._index = 0
