"""Game events for publisher-subscriber communication.

Events are immutable dataclasses stamped with the tick number at which they
were raised. Subscribers register per :class:`EventType` on the
:class:`~kps.core.events.event_manager.EventManager`.
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

from ..game_enums import Move, RoundResult

if TYPE_CHECKING:
    from ..round_state import TickResult


class EventType(Enum):
    """Types of game events that systems can subscribe to."""
    # Round Events
    ROUND_STARTED = auto()
    MOVE_SELECTED = auto()
    TICK_RESOLVED = auto()
    ROUND_FINISHED = auto()

    # Input Events
    INPUT_REJECTED = auto()

    # Logging Events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()

    # Game State Events
    GAME_STARTED = auto()
    GAME_ENDED = auto()

    # System Events
    MANAGER_INITIALIZED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all game events."""
    tick: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class RoundStarted(GameEvent):
    """Event emitted when a fresh round begins."""
    left_health: int
    right_health: int

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.ROUND_STARTED)


@dataclass(frozen=True)
class MoveSelected(GameEvent):
    """Event emitted when the player picks a move."""
    move: Move

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MOVE_SELECTED)


@dataclass(frozen=True)
class TickResolved(GameEvent):
    """Event emitted after a tick's deltas have been applied."""
    result: "TickResult"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TICK_RESOLVED)


@dataclass(frozen=True)
class RoundFinished(GameEvent):
    """Event emitted once either health bar reaches zero."""
    result: RoundResult
    left_health: int
    right_health: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ROUND_FINISHED)


@dataclass(frozen=True)
class InputRejected(GameEvent):
    """Event emitted when a key press maps to no action."""
    raw_input: Optional[str]

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.INPUT_REJECTED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event for sending a message to the game log."""
    message: str
    category: str = "SYSTEM"
    level: str = "INFO"
    source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event for debug-only messages."""
    message: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Event requesting the log be written to disk."""
    path: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)


@dataclass(frozen=True)
class GameStarted(GameEvent):
    """Event emitted when the game loop starts."""
    opponent: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_STARTED)


@dataclass(frozen=True)
class GameEnded(GameEvent):
    """Event emitted when the game shuts down."""
    reason: str
    result: Optional[RoundResult] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_ENDED)


@dataclass(frozen=True)
class ManagerInitialized(GameEvent):
    """Event emitted when a manager finishes setting up."""
    manager_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MANAGER_INITIALIZED)
