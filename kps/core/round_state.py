"""Round state machine.

A :class:`Round` holds the two bounded health counters of one game. Each tick
resolves a pair of moves through the outcome table and applies the deltas,
clamping both counters independently to ``[0, MAX_HEALTH]``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .game_enums import Move, Outcome, RoundResult
from .outcome_table import outcome_for, resolve


MAX_HEALTH = 10
MIN_HEALTH = 0


class RoundInProgressError(RuntimeError):
    """Raised when a winner is requested before the round has finished."""


def clamp(value: int, low: int = MIN_HEALTH, high: int = MAX_HEALTH) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class TickResult:
    """Record of a single applied tick."""
    left_move: Move
    right_move: Move
    outcome: Outcome
    deltas: tuple[int, int]
    before: tuple[int, int]
    after: tuple[int, int]

    @property
    def finished(self) -> bool:
        return self.after[0] <= MIN_HEALTH or self.after[1] <= MIN_HEALTH


@dataclass
class Round:
    """Mutable pair of health counters for one game."""
    left: int = MAX_HEALTH
    right: int = MAX_HEALTH

    def __post_init__(self):
        for name, value in (("left", self.left), ("right", self.right)):
            if not MIN_HEALTH <= value <= MAX_HEALTH:
                raise ValueError(
                    f"{name} health must be within [{MIN_HEALTH}, {MAX_HEALTH}], got {value}"
                )

    @property
    def bars(self) -> tuple[int, int]:
        return self.left, self.right

    @property
    def is_finished(self) -> bool:
        return self.left <= MIN_HEALTH or self.right <= MIN_HEALTH

    def apply_deltas(self, d_left: int, d_right: int) -> None:
        """Apply raw deltas, clamping each side from its pre-tick value."""
        self.left = clamp(self.left + d_left)
        self.right = clamp(self.right + d_right)

    def tick(self, left_move: Move, right_move: Move) -> Optional[TickResult]:
        """Resolve one tick in place.

        Returns None without touching the counters once the round is finished.
        """
        if self.is_finished:
            return None

        before = self.bars
        deltas = resolve(left_move, right_move)
        self.apply_deltas(*deltas)

        return TickResult(
            left_move=left_move,
            right_move=right_move,
            outcome=outcome_for(left_move, right_move),
            deltas=deltas,
            before=before,
            after=self.bars,
        )

    def winner(self) -> RoundResult:
        if not self.is_finished:
            raise RoundInProgressError(
                f"Round still in progress at {self.left}-{self.right}; no winner yet."
            )

        if self.left > self.right:
            return RoundResult.LEFT_WINS
        elif self.left < self.right:
            return RoundResult.RIGHT_WINS
        return RoundResult.DOUBLE_KO


def apply(round_: Round, left_move: Move, right_move: Move) -> Round:
    """Return a new round with one tick applied; ``round_`` is left untouched."""
    next_round = replace(round_)
    next_round.tick(left_move, right_move)
    return next_round


def is_finished(round_: Round) -> bool:
    return round_.is_finished


def winner(round_: Round) -> RoundResult:
    return round_.winner()
