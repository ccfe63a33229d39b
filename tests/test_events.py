"""
Tests for the notification channel.
"""

import pytest

from tetris_core.game import EventChannel, GameEvent, Notification


@pytest.fixture
def channel():
    return EventChannel()


class TestEventChannel:
    def test_catch_all_listener_hears_every_event(self, channel):
        seen = []
        channel.subscribe(seen.append)
        channel.publish(GameEvent.NEW_GAME)
        channel.publish(GameEvent.ROW_CLEARED, 2)
        assert seen == [Notification(GameEvent.NEW_GAME), Notification(GameEvent.ROW_CLEARED, 2)]

    def test_named_listener_is_filtered(self, channel):
        seen = []
        channel.subscribe(seen.append, GameEvent.GAME_OVER)
        channel.publish(GameEvent.NEW_GAME)
        channel.publish(GameEvent.GAME_OVER, True)
        assert [n.event for n in seen] == [GameEvent.GAME_OVER]
        assert seen[0].payload is True

    def test_event_names_accept_plain_strings(self, channel):
        seen = []
        channel.subscribe(seen.append, "next_piece")
        channel.publish("next_piece", 3)
        assert seen == [Notification(GameEvent.NEXT_PIECE, 3)]

    def test_delivery_order_follows_registration(self, channel):
        order = []
        channel.subscribe(lambda n: order.append("first"))
        channel.subscribe(lambda n: order.append("second"))
        channel.publish(GameEvent.BOARD_CHANGE)
        assert order == ["first", "second"]

    def test_unsubscribe(self, channel):
        seen = []
        channel.subscribe(seen.append)
        channel.subscribe(seen.append, GameEvent.NEW_GAME)
        channel.unsubscribe(seen.append)
        channel.publish(GameEvent.NEW_GAME)
        assert len(seen) == 1
        channel.unsubscribe(seen.append, GameEvent.NEW_GAME)
        channel.publish(GameEvent.NEW_GAME)
        assert len(seen) == 1
        assert channel.listener_count() == 0

    def test_unsubscribe_unknown_listener_is_ignored(self, channel):
        channel.unsubscribe(print)
        channel.unsubscribe(print, GameEvent.GAME_OVER)

    def test_listener_may_unsubscribe_during_delivery(self, channel):
        seen = []

        def once(notification):
            seen.append(notification)
            channel.unsubscribe(once)

        channel.subscribe(once)
        channel.publish(GameEvent.NEW_GAME)
        channel.publish(GameEvent.NEW_GAME)
        assert len(seen) == 1

    def test_listener_errors_propagate(self, channel):
        def broken(notification):
            raise RuntimeError("boom")

        channel.subscribe(broken)
        with pytest.raises(RuntimeError):
            channel.publish(GameEvent.NEW_GAME)

    def test_clear(self, channel):
        channel.subscribe(print)
        channel.subscribe(print, GameEvent.ROW_CLEARED)
        assert channel.listener_count() == 2
        assert channel.listener_count(GameEvent.ROW_CLEARED) == 1
        channel.clear()
        assert channel.listener_count() == 0
