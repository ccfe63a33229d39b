from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Union

import numpy as np

from .events import EventChannel, GameEvent, Listener
from .grid import GameGrid
from .pieces import ActivePiece, PieceSnapshot, Rotation, TetrominoType, box_size
from .point import Point
from .supply import RandomSupply, SequenceSupply

logger = logging.getLogger(__name__)

PieceSupply = Union[RandomSupply, SequenceSupply]


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    TICK = 6
    NONE = 7


class GameState(IntEnum):
    NOT_STARTED = 0
    RUNNING = 1
    GAME_OVER = 2


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    # None places each piece's box at the top center of the board
    spawn_x: Optional[int] = None
    spawn_y: Optional[int] = None


class TetrisGame:
    """Rule engine for a falling-block game.

    The engine is the only owner of the grid and the falling piece. Callers
    drive it with commands (`tick` on a timer, the rest from input) and watch
    it through the event channel; every payload it publishes is immutable.
    """

    def __init__(self, config: Optional[GameConfig] = None, channel: Optional[EventChannel] = None) -> None:
        self.config = config or GameConfig()
        largest_box = max(box_size(kind) for kind in TetrominoType)
        if self.config.width < largest_box or self.config.height < largest_box:
            raise ValueError(
                f"Board must be at least {largest_box}x{largest_box}, "
                f"got {self.config.width}x{self.config.height}"
            )
        self._grid = GameGrid(self.config.width, self.config.height)
        self._check_spawn_anchor()
        self.events = channel or EventChannel()
        self.supply: PieceSupply = RandomSupply(self.config.random_seed)
        # Installed by the next new_game, never mid-session
        self._pending_supply: Optional[PieceSupply] = None
        self.state = GameState.NOT_STARTED
        self.current: Optional[ActivePiece] = None
        self.next: Optional[TetrominoType] = None

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def is_over(self) -> bool:
        return self.state == GameState.GAME_OVER

    @property
    def is_running(self) -> bool:
        return self.state == GameState.RUNNING

    @property
    def current_piece(self) -> Optional[PieceSnapshot]:
        return self.current.snapshot() if self.current is not None else None

    @property
    def next_piece(self) -> Optional[TetrominoType]:
        return self.next

    def board(self) -> np.ndarray:
        return self._grid.snapshot()

    def subscribe(self, listener: Listener, event: Optional[GameEvent] = None) -> None:
        self.events.subscribe(listener, event)

    def unsubscribe(self, listener: Listener, event: Optional[GameEvent] = None) -> None:
        self.events.unsubscribe(listener, event)

    def set_piece_sequence(self, pieces: Iterable[TetrominoType]) -> None:
        """Replay `pieces` cyclically starting with the next `new_game`."""
        supply = SequenceSupply(pieces)
        self._pending_supply = supply
        logger.debug("piece sequence set to %s", [p.name for p in supply.sequence])

    def use_random_pieces(self, seed: Optional[int] = None) -> None:
        """Draw random pieces starting with the next `new_game`."""
        self._pending_supply = RandomSupply(seed)

    def new_game(self) -> None:
        if self._pending_supply is not None:
            self.supply = self._pending_supply
            self._pending_supply = None
        self._grid.reset()
        self.supply.reset()
        self.state = GameState.RUNNING
        first = self.supply.draw()
        self.next = self.supply.draw()
        # Spawn anchors are checked against the empty board in __init__
        self.current = self._spawn_candidate(first)
        logger.debug("new game: current=%s next=%s", first.name, self.next.name)
        self.events.publish(GameEvent.NEW_GAME)
        self.events.publish(GameEvent.CURRENT_PIECE, self.current.snapshot())
        self.events.publish(GameEvent.NEXT_PIECE, self.next)

    def move_left(self) -> bool:
        return self._try_move(-1, 0)

    def move_right(self) -> bool:
        return self._try_move(1, 0)

    def move_down(self) -> None:
        if not self.is_running:
            return
        if not self._try_move(0, -1):
            self._lock_piece()

    def tick(self) -> None:
        """Gravity step: fall one row, or lock the piece if it cannot."""
        self.move_down()

    step = tick

    def rotate_cw(self) -> bool:
        return self._try_rotate(clockwise=True)

    def rotate_ccw(self) -> bool:
        return self._try_rotate(clockwise=False)

    def hard_drop(self) -> None:
        if not self.is_running:
            return
        assert self.current is not None
        # Drop until collision
        piece = self.current
        while True:
            candidate = piece.moved(0, -1)
            if not self._grid.can_place(candidate.cells()):
                break
            piece = candidate
        self.current = piece
        self._lock_piece()

    def apply(self, action: Action) -> None:
        if not isinstance(action, Action):
            raise TypeError(f"Expected an Action, got {action!r}")
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE_CW:
            self.rotate_cw()
        elif action == Action.ROTATE_CCW:
            self.rotate_ccw()
        elif action == Action.SOFT_DROP:
            self.move_down()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.TICK:
            self.tick()
        elif action == Action.NONE:
            pass

    def _spawn_candidate(self, kind: TetrominoType) -> ActivePiece:
        size = box_size(kind)
        x = self.config.spawn_x if self.config.spawn_x is not None else (self._grid.width - size) // 2
        y = self.config.spawn_y if self.config.spawn_y is not None else self._grid.height - size
        return ActivePiece(kind=kind, rotation=Rotation.R0, anchor=Point(x, y))

    def _check_spawn_anchor(self) -> None:
        for kind in TetrominoType:
            piece = self._spawn_candidate(kind)
            for rotation in Rotation:
                cells = ActivePiece(kind, rotation, piece.anchor).cells()
                if not all(self._grid.is_inside(cell) for cell in cells):
                    raise ValueError(
                        f"Spawn anchor {tuple(piece.anchor)} puts {kind.name} at {rotation.name} "
                        f"outside the {self._grid.width}x{self._grid.height} board"
                    )

    def _spawn(self, kind: TetrominoType) -> bool:
        candidate = self._spawn_candidate(kind)
        if not self._grid.can_place(candidate.cells()):
            self.current = None
            self.state = GameState.GAME_OVER
            logger.info("game over: %s blocked at spawn", kind.name)
            self.events.publish(GameEvent.GAME_OVER, True)
            return False
        self.current = candidate
        self.events.publish(GameEvent.CURRENT_PIECE, candidate.snapshot())
        return True

    def _install(self, candidate: ActivePiece) -> bool:
        if not self._grid.can_place(candidate.cells()):
            return False
        self.current = candidate
        self.events.publish(GameEvent.CURRENT_PIECE, candidate.snapshot())
        return True

    def _try_move(self, dx: int, dy: int) -> bool:
        if not self.is_running or self.current is None:
            return False
        return self._install(self.current.moved(dx, dy))

    def _try_rotate(self, clockwise: bool) -> bool:
        if not self.is_running or self.current is None:
            return False
        return self._install(self.current.rotated(clockwise))

    def _lock_piece(self) -> None:
        assert self.current is not None and self.next is not None
        piece = self.current
        self._grid.freeze(piece.cells(), piece.kind)
        lines = self._grid.clear_full_rows()
        logger.debug("locked %s at %s, cleared %d row(s)\n%s", piece.kind.name, tuple(piece.anchor), lines, self._grid)
        if lines > 0:
            self.events.publish(GameEvent.ROW_CLEARED, lines)
        self.events.publish(GameEvent.BOARD_CHANGE, self._grid.snapshot())
        upcoming = self.next
        self.next = self.supply.draw()
        self.events.publish(GameEvent.NEXT_PIECE, self.next)
        self._spawn(upcoming)
