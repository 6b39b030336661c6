"""
Main game orchestration class.

This module coordinates the renderer, the input handler, the log manager and
the round state machine, and owns the main game loop.
"""

import time
from typing import Optional, TypeVar

from ..core.events import (
    DebugMessage,
    EventManager,
    EventPriority,
    GameEnded,
    GameStarted,
    LogMessage,
    LogSaveRequested,
    RoundFinished,
    RoundStarted,
    TickResolved,
)
from ..core.game_enums import Move, RESULT_MESSAGES
from ..core.game_state import GameState
from ..core.input_system import KeyConfigLoader
from ..core.move_source import MoveSource, RandomMoveSource
from ..core.renderer import Renderer
from ..core.round_state import TickResult
from .input_handler import InputHandler
from .log_manager import LogLevel, LogManager
from .render_builder import BANNER, RenderBuilder


TManager = TypeVar("TManager")

# Log lines shown under the fight in debug mode
DEBUG_LOG_LINES = 8


class Game:
    """Main game orchestrator."""

    def __init__(
        self,
        renderer: Renderer,
        move_source: Optional[MoveSource] = None,
        key_config: Optional[KeyConfigLoader] = None,
        fps: int = 30,
        debug: bool = False,
        save_log: Optional[str] = None,
    ):
        self.renderer = renderer
        self.move_source = move_source or RandomMoveSource()
        self.key_config = key_config
        self.state = GameState()
        self.debug = debug
        self.save_log = save_log

        self.running = False
        self.fps = fps
        self.frame_time = 1.0 / self.fps

        self.event_manager = EventManager(enable_debug_logging=debug)

        # Managers - created in initialize()
        self._log_manager: Optional[LogManager] = None
        self._input_handler: Optional[InputHandler] = None
        self._render_builder: Optional[RenderBuilder] = None

    def _require_manager(self, manager: Optional[TManager], name: str) -> TManager:
        """Return the manager if initialized, otherwise raise a helpful error."""
        if manager is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return manager

    @property
    def log_manager(self) -> LogManager:
        return self._require_manager(self._log_manager, "LogManager")

    @property
    def input_handler(self) -> InputHandler:
        return self._require_manager(self._input_handler, "InputHandler")

    @property
    def render_builder(self) -> RenderBuilder:
        return self._require_manager(self._render_builder, "RenderBuilder")

    def initialize(self) -> None:
        """Initialize the renderer and all managers, then start a round."""
        self.renderer.start()

        self._log_manager = LogManager(
            event_manager=self.event_manager,
            game_state=self.state,
            default_level=LogLevel.DEBUG if self.debug else LogLevel.INFO,
        )
        self.event_manager.set_debug_callback(self.log_manager.debug)

        self._input_handler = InputHandler(
            game_state=self.state,
            event_manager=self.event_manager,
            key_config=self.key_config,
        )
        self.input_handler.on_quit = self.quit
        self.input_handler.on_exit = self.quit

        self._render_builder = RenderBuilder(
            game_state=self.state,
            key_config=self.input_handler.key_config,
            log_lines=DEBUG_LOG_LINES if self.debug else 0,
        )

        self.state.start_new_round()
        self.event_manager.publish(
            GameStarted(tick=0, opponent=self.move_source.get_source_name()),
            source="Game",
        )
        self.event_manager.publish(
            RoundStarted(tick=0, left_health=self.state.round.left, right_health=self.state.round.right),
            priority=EventPriority.HIGH,
            source="Game",
        )
        self._emit_log(BANNER, category="BATTLE")
        self.event_manager.process_events()

        self.running = True

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(
                tick=self.state.tick_count,
                message=message,
                category=category,
                level=level,
                source="Game",
            ),
            source="Game",
        )

    def run(self) -> None:
        """Main game loop.

        The renderer is stopped on the way out even if initialization fails,
        so the terminal is never left in raw mode.
        """
        try:
            self.initialize()
            self.render()

            last_frame = time.time()
            while self.running:
                current_time = time.time()
                delta_time = current_time - last_frame

                if delta_time >= self.frame_time:
                    self.update()
                    self.render()
                    last_frame = current_time
                else:
                    time.sleep(0.001)
        finally:
            self.cleanup()

    def update(self) -> None:
        """Process queued events and pending input."""
        self.event_manager.process_events()

        for event in self.renderer.get_input_events():
            move = self.input_handler.handle_input(event)
            if move is not None and not self.state.is_game_over:
                self.play_tick(move)
            if not self.running:
                break

        self.event_manager.process_events()

    def play_tick(self, left_move: Move) -> Optional[TickResult]:
        """Resolve one tick with the player's move against the move source.

        Returns None when the round is already over.
        """
        if self.state.is_game_over:
            return None

        right_move = self.move_source.next_move()
        result = self.state.round.tick(left_move, right_move)
        if result is None:
            return None

        self.state.record_tick(result)
        self.event_manager.publish(
            TickResolved(tick=self.state.tick_count, result=result),
            priority=EventPriority.HIGH,
            source="Game",
        )
        self._emit_log(f"{result.left_move} - {result.right_move}", category="BATTLE")
        self.event_manager.publish(
            DebugMessage(
                tick=self.state.tick_count,
                message=(
                    f"{result.outcome.name} {result.deltas}: "
                    f"{result.before[0]}-{result.before[1]} -> {result.after[0]}-{result.after[1]}"
                ),
                source="Game",
            ),
            source="Game",
        )

        if self.state.round.is_finished:
            self._finish_round()

        return result

    def _finish_round(self) -> None:
        round_ = self.state.round
        outcome = round_.winner()
        self.state.end_round()

        self.event_manager.publish(
            RoundFinished(
                tick=self.state.tick_count,
                result=outcome,
                left_health=round_.left,
                right_health=round_.right,
            ),
            priority=EventPriority.HIGH,
            source="Game",
        )
        self._emit_log(RESULT_MESSAGES[outcome], category="BATTLE")

    def render(self) -> None:
        """Draw a frame if anything changed since the last one."""
        if not self.state.needs_redraw:
            return

        self.renderer.draw(self.render_builder.build_render_context())
        self.state.needs_redraw = False

    def quit(self) -> None:
        self.running = False

    def cleanup(self) -> None:
        """Announce the end of the game, flush the log and stop the renderer."""
        try:
            result = self.state.round.winner() if self.state.is_game_over else None
            self.event_manager.publish(
                GameEnded(
                    tick=self.state.tick_count,
                    reason="finished" if result else "quit",
                    result=result,
                ),
                priority=EventPriority.HIGH,
                source="Game",
            )

            stats = self.event_manager.get_statistics()
            self.event_manager.publish(
                DebugMessage(
                    tick=self.state.tick_count,
                    message=(
                        f"{stats['events_published']} events published, "
                        f"{stats['events_processed']} delivered, "
                        f"{stats['subscriber_errors']} subscriber errors"
                    ),
                    source="Game",
                ),
                source="Game",
            )
            if self.save_log:
                self.event_manager.publish(
                    LogSaveRequested(tick=self.state.tick_count, path=self.save_log),
                    source="Game",
                )
            self.event_manager.process_events()
            self.event_manager.shutdown()
        finally:
            self.renderer.stop()
