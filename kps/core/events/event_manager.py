"""
Event bus for the fight loop.

Events published during a frame are queued and delivered together when the
game loop calls :meth:`EventManager.process_events`. Round events go out at
HIGH priority so state subscribers see a tick before the log lines about it.
"""

import threading
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Delivery order within one ``process_events`` call (lower goes first)."""
    HIGH = 0
    NORMAL = 1


@dataclass
class QueuedEvent:
    """An event waiting for delivery, tagged with who published it."""
    event: "GameEvent"
    priority: EventPriority = EventPriority.NORMAL
    source: str = "unknown"

    def __lt__(self, other: "QueuedEvent") -> bool:
        return self.priority.value < other.priority.value


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Queued publish/subscribe bus keyed by :class:`EventType`."""

    def __init__(self, enable_debug_logging: bool = False):
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._queue: list[QueuedEvent] = []

        self._events_published = 0
        self._events_processed = 0
        self._subscriber_errors = 0

        self._lock = threading.RLock()
        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        with self._lock:
            self._subscribers[event_type].append(subscriber)

        name = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._debug_log(f"{name} listens for {event_type.name}")

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event for the next :meth:`process_events` call."""
        queued = QueuedEvent(event=event, priority=priority, source=source or "unknown")
        with self._lock:
            self._queue.append(queued)
            self._events_published += 1

        self._debug_log(f"Queued {type(event).__name__} from {queued.source} ({priority.name})")

    def process_events(self) -> int:
        """Deliver everything queued so far, HIGH before NORMAL.

        Events published by subscribers during delivery wait for the next call.

        Returns:
            Number of events delivered
        """
        with self._lock:
            # sorted() is stable, so publish order holds within a priority
            batch = sorted(self._queue)
            self._queue = []

        for queued in batch:
            self._deliver(queued)
        return len(batch)

    def _deliver(self, queued: QueuedEvent) -> None:
        event = queued.event
        with self._lock:
            self._events_processed += 1
            subscribers = list(self._subscribers.get(event.event_type, []))

        self._debug_log(f"Delivering {type(event).__name__} from {queued.source} (tick {event.tick})")

        # A failing subscriber is counted and skipped; the rest still run
        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                with self._lock:
                    self._subscriber_errors += 1
                self._debug_log(f"{getattr(subscriber, '__name__', 'anonymous')} failed: {e}")

    def get_statistics(self) -> dict[str, Any]:
        with self._lock:
            return {
                'events_published': self._events_published,
                'events_processed': self._events_processed,
                'events_queued': len(self._queue),
                'subscriber_errors': self._subscriber_errors,
                'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
            }

    def shutdown(self) -> None:
        """Drop all subscribers and anything still queued."""
        with self._lock:
            self._subscribers.clear()
            self._queue.clear()
        self._debug_log("Event bus shut down")
