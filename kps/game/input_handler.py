"""
Input handling for the fight loop.

Key presses are looked up in the bindings of the active input context:
- FIGHT: move keys select the player's move, the quit key leaves the game
- GAME_OVER: any key leaves the game

Keys with no binding are rejected silently and the player is prompted again.
"""

from typing import TYPE_CHECKING, Callable, Optional

from ..core.events import InputRejected, LogMessage, ManagerInitialized, MoveSelected
from ..core.game_enums import Move
from ..core.input import InputEvent, InputType
from ..core.input_system import InputContext, InputContextManager, KeyConfigLoader
from ..core.input_system.key_config_loader import (
    EXIT_ACTION,
    MOVE_ACTION_PREFIX,
    QUIT_ACTION,
)

if TYPE_CHECKING:
    from ..core.events import EventManager
    from ..core.game_state import GameState


def move_for_action(action: str) -> Optional[Move]:
    """Map a ``move_<name>`` action to its Move."""
    if not action.startswith(MOVE_ACTION_PREFIX):
        return None
    try:
        return Move[action[len(MOVE_ACTION_PREFIX):].upper()]
    except KeyError:
        return None


class InputHandler:
    """Maps input events to moves and game commands."""

    def __init__(
        self,
        game_state: "GameState",
        event_manager: "EventManager",
        key_config: Optional[KeyConfigLoader] = None,
    ):
        self.state = game_state
        self.event_manager = event_manager
        self.context_manager = InputContextManager(game_state)

        if key_config is None:
            key_config = KeyConfigLoader(on_warning=self._log_config_warning)
            key_config.load_config()
        self.key_config = key_config

        # Callbacks that will be set by the main Game class
        self.on_quit: Optional[Callable[[], None]] = None
        self.on_exit: Optional[Callable[[], None]] = None

        self.event_manager.publish(
            ManagerInitialized(tick=self.state.tick_count, manager_name="InputHandler"),
            source="InputHandler",
        )

    def _log_config_warning(self, message: str) -> None:
        self.event_manager.publish(
            LogMessage(
                tick=self.state.tick_count,
                message=message,
                category="WARNING",
                level="WARNING",
                source="InputHandler",
            ),
            source="InputHandler",
        )

    def handle_input(self, event: InputEvent) -> Optional[Move]:
        """Process one input event.

        Returns:
            The selected Move, or None when the event selects no move
        """
        if event.event_type == InputType.QUIT:
            self._fire(self.on_quit)
            return None

        if event.event_type != InputType.KEY_PRESS or event.key is None:
            return None

        context = self.context_manager.get_current_context()
        action = self.key_config.get_action_for_key(event.key, context)

        if action is None:
            self.event_manager.publish(
                InputRejected(tick=self.state.tick_count, raw_input=event.raw_data),
                source="InputHandler",
            )
            self.event_manager.publish(
                LogMessage(
                    tick=self.state.tick_count,
                    message=f"Ignored key {event.key.name} in {context.value}",
                    category="INPUT",
                    level="DEBUG",
                    source="InputHandler",
                ),
                source="InputHandler",
            )
            return None

        if action == QUIT_ACTION:
            self._fire(self.on_quit)
            return None

        if action == EXIT_ACTION:
            self._fire(self.on_exit)
            return None

        move = move_for_action(action)
        if move is None or context != InputContext.FIGHT:
            self._log_config_warning(f"Unknown action '{action}' bound to {event.key.name}")
            return None

        self.event_manager.publish(
            MoveSelected(tick=self.state.tick_count, move=move),
            source="InputHandler",
        )
        return move

    @staticmethod
    def _fire(callback: Optional[Callable[[], None]]) -> None:
        if callback:
            callback()
