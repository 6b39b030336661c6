"""Move source strategy classes.

A move source supplies one side's move each tick. The opponent normally uses
:class:`RandomMoveSource`; tests and scripted play swap in
:class:`ScriptedMoveSource` for a fixed sequence.
"""

import random
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from .game_enums import Move


MOVE_CODES: dict[str, Move] = {
    "k": Move.KICK,
    "p": Move.PUNCH,
    "s": Move.SWEEP,
    "c": Move.CROUCH,
    "b": Move.BLOCK,
    "j": Move.JUMP,
}


class MoveSourceExhausted(RuntimeError):
    """Raised when a non-looping scripted source has no moves left."""


class MoveSource(ABC):
    """Abstract base class for move supply strategies."""

    @abstractmethod
    def next_move(self) -> Move:
        """Return the move to play this tick."""
        pass

    @abstractmethod
    def get_source_name(self) -> str:
        pass


class RandomMoveSource(MoveSource):
    """Uniform random choice over all moves, independent each tick."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.seed = seed
        self._rng = rng or random.Random(seed)
        self._moves = list(Move)

    def next_move(self) -> Move:
        return self._rng.choice(self._moves)

    def get_source_name(self) -> str:
        return "Random" if self.seed is None else f"Random(seed={self.seed})"


class ScriptedMoveSource(MoveSource):
    """Plays back a fixed sequence of moves."""

    def __init__(self, moves: Iterable[Move], loop: bool = False):
        self.moves = list(moves)
        if not self.moves:
            raise ValueError("Scripted move source needs at least one move")
        self.loop = loop
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self.moves) - self._position

    def next_move(self) -> Move:
        if self._position >= len(self.moves):
            if not self.loop:
                raise MoveSourceExhausted(
                    f"Scripted move source ran out after {len(self.moves)} moves"
                )
            self._position = 0

        move = self.moves[self._position]
        self._position += 1
        return move

    def get_source_name(self) -> str:
        return f"Scripted({len(self.moves)} moves)"


def parse_move_script(text: str) -> list[Move]:
    """Parse single-character move codes such as ``"kps cbj"``.

    Whitespace is ignored and codes are case-insensitive.
    """
    moves = []
    for char in text:
        if char.isspace():
            continue
        move = MOVE_CODES.get(char.lower())
        if move is None:
            raise ValueError(
                f"Unknown move code '{char}' (expected one of {', '.join(MOVE_CODES)})"
            )
        moves.append(move)
    return moves
