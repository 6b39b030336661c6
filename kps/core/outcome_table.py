"""Outcome table for move resolution.

The table is kept as data: a 6x6 grid of named outcomes, rows indexed by the
left move and columns by the right move, both in ``Move`` declaration order.
A numpy delta array is derived from the grid once at import time so lookups
are a single index operation.

Aggressive moves (Kick, Punch, Sweep) form a triangle among themselves:
Kick beats Punch, Punch beats Sweep, Sweep beats Kick, mirrors trade.
Against the defensive moves each aggressive move is countered by one, blocked
by another and chips the third. Defensive moves never hurt each other.
"""

import numpy as np
from numpy.typing import NDArray

from .game_enums import Move, Outcome


_W = Outcome.WIN
_T = Outcome.TRADE
_L = Outcome.LOSE
_C = Outcome.CHIP
_O = Outcome.OUCH
_D = Outcome.DODGE
_M = Outcome.MISS
_X = Outcome.DRAW

# left \ right:  Kick Punch Sweep Crouch Block Jump
OUTCOME_GRID: tuple[tuple[Outcome, ...], ...] = (
    (_T, _W, _L, _M, _X, _C),  # Kick
    (_L, _T, _W, _C, _M, _X),  # Punch
    (_W, _L, _T, _X, _C, _M),  # Sweep
    (_D, _O, _X, _X, _X, _X),  # Crouch
    (_X, _D, _O, _X, _X, _X),  # Block
    (_O, _X, _D, _X, _X, _X),  # Jump
)


def _build_delta_table() -> NDArray[np.int8]:
    """Flatten the outcome grid into a (6, 6, 2) array of deltas."""
    size = len(Move)
    table = np.zeros((size, size, 2), dtype=np.int8)
    for row, outcomes in enumerate(OUTCOME_GRID):
        for col, outcome in enumerate(outcomes):
            table[row, col] = outcome.deltas
    table.flags.writeable = False
    return table


_DELTA_TABLE = _build_delta_table()


def delta_table() -> NDArray[np.int8]:
    """Read-only view of the delta array, indexed by ``(left.index, right.index)``."""
    return _DELTA_TABLE


def outcome_for(left: Move, right: Move) -> Outcome:
    """Named outcome of ``left`` played against ``right``."""
    return OUTCOME_GRID[left.index][right.index]


def resolve(left: Move, right: Move) -> tuple[int, int]:
    """Resolve a move pairing into ``(delta_left, delta_right)``.

    Total over all 36 ordered pairs, pure and deterministic.
    """
    d_left, d_right = _DELTA_TABLE[left.index, right.index]
    return int(d_left), int(d_right)
