"""Centralized game enums and constants.

This module contains the core game enums shared by the outcome table, the
round state machine and the presentation layer, providing a single source of
truth for move identity and result categories.
"""

from enum import Enum, auto


class Move(Enum):
    """The six moves a side can play in a tick.

    Declaration order is significant: ``index`` is used to address the
    outcome table.
    """
    KICK = auto()
    PUNCH = auto()
    SWEEP = auto()
    CROUCH = auto()
    BLOCK = auto()
    JUMP = auto()

    @property
    def label(self) -> str:
        """Canonical display label ("Kick", "Punch", ...)."""
        return self.name.title()

    @property
    def index(self) -> int:
        """Zero-based ordinal in declaration order."""
        return self.value - 1

    @property
    def is_aggressive(self) -> bool:
        return self in AGGRESSIVE_MOVES

    def __str__(self) -> str:
        return self.label


AGGRESSIVE_MOVES = frozenset({Move.KICK, Move.PUNCH, Move.SWEEP})
DEFENSIVE_MOVES = frozenset({Move.CROUCH, Move.BLOCK, Move.JUMP})


class Outcome(Enum):
    """Named result of a move pairing, valued by its (left, right) deltas."""
    WIN = (0, -2)
    TRADE = (-1, -1)
    LOSE = (-2, 0)
    CHIP = (0, -1)
    OUCH = (-1, 0)
    DODGE = (1, 0)
    MISS = (0, 1)
    DRAW = (0, 0)

    @property
    def deltas(self) -> tuple[int, int]:
        return self.value


class Side(Enum):
    """The two sides of a round."""
    LEFT = 0   # Player
    RIGHT = 1  # Opponent


class RoundResult(Enum):
    """Final result of a finished round."""
    LEFT_WINS = auto()
    RIGHT_WINS = auto()
    DOUBLE_KO = auto()


SIDE_NAMES = {
    Side.LEFT: "YOU",
    Side.RIGHT: "CPU",
}

RESULT_MESSAGES = {
    RoundResult.LEFT_WINS: "You win!",
    RoundResult.RIGHT_WINS: "You lose!",
    RoundResult.DOUBLE_KO: "Double KO!",
}
