"""Event system for publisher-subscriber communication.

This package contains the event-driven plumbing:
- event_manager.py: Publisher-subscriber event routing
- events.py: Event definitions for inter-system communication
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    RoundStarted,
    MoveSelected,
    TickResolved,
    RoundFinished,
    InputRejected,
    LogMessage,
    DebugMessage,
    LogSaveRequested,
    GameStarted,
    GameEnded,
    ManagerInitialized,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "RoundStarted",
    "MoveSelected",
    "TickResolved",
    "RoundFinished",
    "InputRejected",
    "LogMessage",
    "DebugMessage",
    "LogSaveRequested",
    "GameStarted",
    "GameEnded",
    "ManagerInitialized",
]
