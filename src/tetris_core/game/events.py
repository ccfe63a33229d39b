"""Synchronous named-event channel between the engine and its observers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class GameEvent(str, Enum):
    NEW_GAME = "new_game"
    CURRENT_PIECE = "current_piece"
    NEXT_PIECE = "next_piece"
    BOARD_CHANGE = "board_change"
    ROW_CLEARED = "row_cleared"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Notification:
    event: GameEvent
    payload: Any = None


Listener = Callable[[Notification], None]


class EventChannel:
    """Publish/subscribe registry keyed by `GameEvent`.

    Listeners registered without an event hear everything. Delivery happens
    on the publisher's call stack, in registration order; an exception raised
    by a listener propagates to whoever triggered the publish.
    """

    def __init__(self) -> None:
        self._all: List[Listener] = []
        self._by_event: Dict[GameEvent, List[Listener]] = {}

    def subscribe(self, listener: Listener, event: Optional[GameEvent] = None) -> None:
        if event is None:
            self._all.append(listener)
        else:
            self._by_event.setdefault(GameEvent(event), []).append(listener)

    def unsubscribe(self, listener: Listener, event: Optional[GameEvent] = None) -> None:
        """Remove one registration of `listener`; unknown listeners are ignored."""
        bucket = self._all if event is None else self._by_event.get(GameEvent(event), [])
        if listener in bucket:
            bucket.remove(listener)

    def clear(self) -> None:
        self._all.clear()
        self._by_event.clear()

    def listener_count(self, event: Optional[GameEvent] = None) -> int:
        if event is None:
            return len(self._all) + sum(len(v) for v in self._by_event.values())
        return len(self._by_event.get(GameEvent(event), []))

    def publish(self, event: GameEvent, payload: Any = None) -> None:
        notification = Notification(GameEvent(event), payload)
        # Copy so listeners may unsubscribe while being notified
        listeners = list(self._all) + list(self._by_event.get(notification.event, []))
        logger.debug("publish %s to %d listener(s)", notification.event.value, len(listeners))
        for listener in listeners:
            listener(notification)
