"""
Unit tests for the Event Manager system.

Tests the queued publisher-subscriber bus used by the game loop, the input
handler and the log manager.
"""

from unittest.mock import Mock

from kps.core.events import (
    EventManager,
    EventPriority,
    EventType,
    LogMessage,
    QueuedEvent,
    RoundFinished,
    RoundStarted,
)
from kps.core.game_enums import RoundResult


def make_event(tick: int = 0) -> RoundStarted:
    return RoundStarted(tick=tick, left_health=10, right_health=10)


class TestEvents:
    """Test event dataclasses."""

    def test_event_type_is_set(self):
        assert make_event().event_type == EventType.ROUND_STARTED
        finished = RoundFinished(tick=4, result=RoundResult.DOUBLE_KO, left_health=0, right_health=0)
        assert finished.event_type == EventType.ROUND_FINISHED

    def test_log_message_defaults(self):
        event = LogMessage(tick=0, message="hello")
        assert event.category == "SYSTEM"
        assert event.level == "INFO"
        assert event.source is None


class TestQueuedEvent:
    """Test QueuedEvent ordering."""

    def test_high_sorts_before_normal(self):
        high = QueuedEvent(make_event(), EventPriority.HIGH)
        normal = QueuedEvent(make_event(), EventPriority.NORMAL)

        assert high < normal
        assert not normal < high


class TestEventManager:
    """Test EventManager functionality."""

    def test_creation(self, event_manager):
        stats = event_manager.get_statistics()
        assert stats['events_published'] == 0
        assert stats['events_processed'] == 0
        assert stats['events_queued'] == 0

    def test_publish_queues_until_processed(self, event_manager):
        subscriber = Mock()
        event_manager.subscribe(EventType.ROUND_STARTED, subscriber)

        event = make_event()
        event_manager.publish(event, source="test")

        subscriber.assert_not_called()
        assert event_manager.get_statistics()['events_queued'] == 1

        assert event_manager.process_events() == 1
        subscriber.assert_called_once_with(event)
        assert event_manager.get_statistics()['events_queued'] == 0

    def test_only_matching_type_delivered(self, event_manager):
        subscriber = Mock()
        event_manager.subscribe(EventType.ROUND_FINISHED, subscriber)

        event_manager.publish(make_event())
        event_manager.process_events()

        subscriber.assert_not_called()

    def test_high_priority_first_then_publish_order(self, event_manager):
        received = []
        event_manager.subscribe(EventType.ROUND_STARTED, lambda e: received.append(e.tick))

        event_manager.publish(make_event(1))
        event_manager.publish(make_event(2), priority=EventPriority.HIGH)
        event_manager.publish(make_event(3))
        event_manager.publish(make_event(4), priority=EventPriority.HIGH)
        event_manager.process_events()

        assert received == [2, 4, 1, 3]

    def test_events_published_during_delivery_wait(self, event_manager):
        follow_up = Mock()
        event_manager.subscribe(
            EventType.ROUND_STARTED,
            lambda e: event_manager.publish(LogMessage(tick=e.tick, message="started")),
        )
        event_manager.subscribe(EventType.LOG_MESSAGE, follow_up)

        event_manager.publish(make_event())

        assert event_manager.process_events() == 1
        follow_up.assert_not_called()
        assert event_manager.process_events() == 1
        follow_up.assert_called_once()

    def test_failing_subscriber_does_not_block_others(self, event_manager):
        debug_lines = []
        event_manager.enable_debug_logging = True
        event_manager.set_debug_callback(debug_lines.append)

        def failing(event):
            raise ValueError("boom")

        healthy = Mock()
        event_manager.subscribe(EventType.ROUND_STARTED, failing)
        event_manager.subscribe(EventType.ROUND_STARTED, healthy)

        event_manager.publish(make_event())
        event_manager.process_events()

        healthy.assert_called_once()
        assert event_manager.get_statistics()['subscriber_errors'] == 1
        assert any("boom" in line for line in debug_lines)

    def test_debug_logging_off_by_default(self, event_manager):
        debug_lines = []
        event_manager.set_debug_callback(debug_lines.append)

        event_manager.publish(make_event())
        event_manager.process_events()

        assert debug_lines == []

    def test_shutdown(self, event_manager):
        subscriber = Mock()
        event_manager.subscribe(EventType.ROUND_STARTED, subscriber)
        event_manager.publish(make_event())

        event_manager.shutdown()

        assert event_manager.process_events() == 0
        subscriber.assert_not_called()
        assert event_manager.get_statistics()['subscribers_count'] == 0


class TestStandaloneManager:
    """Test a manager with debug logging switched on at construction."""

    def test_debug_lines_are_tagged(self):
        lines = []
        manager = EventManager(enable_debug_logging=True)
        manager.set_debug_callback(lines.append)

        manager.publish(make_event(), source="tester")

        assert lines == ["[EVENT] Queued RoundStarted from tester (NORMAL)"]
