"""
Input context management.

Determines which set of key bindings is active based on the game phase.
"""
from enum import Enum
from typing import TYPE_CHECKING

from ..game_state import GamePhase

if TYPE_CHECKING:
    from ..game_state import GameState


class InputContext(Enum):
    """Input context defines which keys are active and what they do."""
    FIGHT = "fight"
    GAME_OVER = "game_over"


class InputContextManager:
    """Maps game phases to input contexts."""

    def __init__(self, game_state: "GameState"):
        self.state = game_state

    def get_current_context(self) -> InputContext:
        if self.state.phase == GamePhase.GAME_OVER:
            return InputContext.GAME_OVER
        return InputContext.FIGHT
