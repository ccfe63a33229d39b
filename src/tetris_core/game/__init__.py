"""Game module for tetris-core.

Exports the rule engine and supporting classes:
- Point: Board coordinate with translation
- TetrominoType / Rotation: Piece kinds and rotation states
- ActivePiece / PieceSnapshot: The falling piece and its published view
- GameGrid: Frozen cells, collision queries and line clearing
- EventChannel / GameEvent: Notifications published by the engine
- RandomSupply / SequenceSupply: Sources of upcoming pieces
- TetrisGame: Command surface and state machine
"""

from .point import Point
from .pieces import ActivePiece, PieceSnapshot, Rotation, TetrominoType, cells_for
from .grid import GameGrid, PlacementError
from .events import EventChannel, GameEvent, Notification
from .supply import RandomSupply, SequenceSupply
from .core import Action, GameConfig, GameState, TetrisGame

__all__ = [
    "Point",
    "ActivePiece",
    "PieceSnapshot",
    "Rotation",
    "TetrominoType",
    "cells_for",
    "GameGrid",
    "PlacementError",
    "EventChannel",
    "GameEvent",
    "Notification",
    "RandomSupply",
    "SequenceSupply",
    "Action",
    "GameConfig",
    "GameState",
    "TetrisGame",
]
