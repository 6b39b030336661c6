"""
Render context builder.

Translates the current :class:`GameState` into a :class:`RenderContext`
so renderers never touch game logic directly.
"""

from typing import TYPE_CHECKING, Optional

from ..core.game_enums import Move, RESULT_MESSAGES, SIDE_NAMES, Side
from ..core.input import Key
from ..core.input_system import InputContext
from ..core.renderable import HealthBarRenderData, RenderContext, TextRenderData
from ..core.round_state import MAX_HEALTH

if TYPE_CHECKING:
    from ..core.game_state import GameState
    from ..core.input_system import KeyConfigLoader


BANNER = "Fight!"
EXIT_HINT = " Press any key to exit."


def _key_char(key: Key) -> str:
    if key.name.startswith("NUM_"):
        return key.name[len("NUM_"):]
    return key.name.lower()


def describe_move_key(move: Move, key: Optional[Key]) -> str:
    """Prompt fragment for a move, e.g. ``(k)ick`` or ``(1) Kick``."""
    if key is None:
        return move.label
    char = _key_char(key)
    if len(char) == 1 and move.label.lower().startswith(char):
        return f"({char}){move.label[1:].lower()}"
    return f"({char}) {move.label}"


def build_prompt(key_config: "KeyConfigLoader") -> str:
    """Build the move prompt from the active key bindings."""
    fragments = []
    for move in Move:
        keys = key_config.get_keys_for_action(f"move_{move.name.lower()}", InputContext.FIGHT)
        # Prefer the mnemonic letter when several keys are bound
        preferred = next(
            (key for key in keys if _key_char(key) == move.label[0].lower()),
            keys[0] if keys else None,
        )
        fragments.append(describe_move_key(move, preferred))

    return f"Press {', '.join(fragments[:-1])} or {fragments[-1]}."


class RenderBuilder:
    """Builds render contexts from game state."""

    def __init__(self, game_state: "GameState", key_config: "KeyConfigLoader", log_lines: int = 0):
        self.state = game_state
        self.key_config = key_config
        self.log_lines = log_lines
        self._prompt: Optional[str] = None

    @property
    def prompt(self) -> str:
        if self._prompt is None:
            self._prompt = build_prompt(self.key_config)
        return self._prompt

    def build_render_context(self) -> RenderContext:
        round_ = self.state.round
        context = RenderContext(
            left_bar=HealthBarRenderData(
                side=Side.LEFT, label=SIDE_NAMES[Side.LEFT],
                health=round_.left, max_health=MAX_HEALTH,
            ),
            right_bar=HealthBarRenderData(
                side=Side.RIGHT, label=SIDE_NAMES[Side.RIGHT],
                health=round_.right, max_health=MAX_HEALTH,
            ),
        )

        tick = self.state.last_tick
        if tick is None:
            context.banner = BANNER
        else:
            context.moves_line = f"{tick.left_move} - {tick.right_move}"

        if self.state.is_game_over:
            context.result_message = RESULT_MESSAGES[round_.winner()] + EXIT_HINT
        else:
            context.prompt = self.prompt

        if self.log_lines > 0:
            messages = self.state.log_data.get('messages', [])
            context.log_messages = list(messages[-self.log_lines:])
            context.texts.extend(TextRenderData(text=msg, style="log") for msg in context.log_messages)

        return context
