"""Game state for a single fight.

:class:`GameState` wraps the :class:`Round` together with the bookkeeping the
game loop and renderers need: the current phase, the last resolved tick and a
copy of the log for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional

from .round_state import Round, TickResult


class GamePhase(Enum):
    """High level game phases."""

    FIGHT = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Top-level game state."""

    phase: GamePhase = GamePhase.FIGHT
    round: Round = field(default_factory=Round)
    last_tick: Optional[TickResult] = None
    tick_count: int = 0

    log_data: dict[str, Any] = field(default_factory=dict)
    needs_redraw: bool = True

    def start_new_round(self) -> None:
        self.phase = GamePhase.FIGHT
        self.round = Round()
        self.last_tick = None
        self.tick_count = 0
        self.needs_redraw = True

    def record_tick(self, result: TickResult) -> None:
        self.last_tick = result
        self.tick_count += 1
        self.needs_redraw = True

    def end_round(self) -> None:
        self.phase = GamePhase.GAME_OVER
        self.needs_redraw = True

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER
