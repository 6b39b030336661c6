import os
import sys
import termios
import tty
import select
from typing import Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import (
    EMPTY_SYMBOL, FILL_SYMBOL, HealthBarRenderData, RenderContext, render_bar
)
from ..core.input import InputEvent


# Ctrl-C / Ctrl-D arrive as plain characters in raw mode
INTERRUPT_CHARS = {'\x03', '\x04'}

# How long to wait for the rest of an escape sequence after ESC
ESCAPE_SEQUENCE_TIMEOUT = 0.02


class TerminalRenderer(Renderer):

    def __init__(self, config: Optional[RendererConfig] = None, show_log: bool = False,
                 input_fd: Optional[int] = None):
        super().__init__(config)
        self._old_settings = None
        self._buffer: list[str] = []
        self.show_log = show_log
        self._input_fd = input_fd

        # Terminal control codes
        self.terminal_codes = {
            "reset": "\033[0m",
            "clear_screen": "\033[2J",
            "cursor_home": "\033[H",
            "hide_cursor": "\033[?25l",
            "show_cursor": "\033[?25h",
            "text_normal": "\033[97m",      # White
            "text_dim": "\033[37m",         # Light gray
            "text_bright": "\033[1;97m",    # Bright white
            "text_success": "\033[92m",     # Green
            "text_warning": "\033[93m",     # Yellow
            "text_error": "\033[91m",       # Red
        }

        # Bar fill colour by remaining health fraction (checked top-down)
        self.bar_colors = [
            (0.6, "\033[92m"),  # green
            (0.3, "\033[93m"),  # yellow
            (0.0, "\033[91m"),  # red
        ]

        self.text_styles = {
            "banner": self.terminal_codes["text_bright"],
            "moves": self.terminal_codes["text_normal"],
            "prompt": self.terminal_codes["text_dim"],
            "result": self.terminal_codes["text_warning"],
            "log": self.terminal_codes["text_dim"],
        }

    @property
    def input_fd(self) -> int:
        return self._input_fd if self._input_fd is not None else sys.stdin.fileno()

    def initialize(self) -> None:
        self._old_settings = termios.tcgetattr(self.input_fd)
        tty.setraw(self.input_fd)
        # Window title, then hide the cursor
        print(f"\033]0;{self.config.title}\007" + self.terminal_codes["hide_cursor"], end='', flush=True)
        self.clear()

    def cleanup(self) -> None:
        if self._old_settings:
            termios.tcsetattr(self.input_fd, termios.TCSADRAIN, self._old_settings)
            self._old_settings = None
        print(self.terminal_codes["show_cursor"], end='', flush=True)
        print(self.terminal_codes["reset"], end='', flush=True)

    def clear(self) -> None:
        print(self.terminal_codes["clear_screen"] + self.terminal_codes["cursor_home"], end='', flush=True)

    def present(self) -> None:
        self.clear()

        # Raw mode needs explicit carriage returns
        for line in self._buffer:
            print(line + '\r\n', end='', flush=True)
        self._buffer.clear()

    def _bar_color(self, bar: HealthBarRenderData) -> str:
        fraction = bar.hp_percent
        for threshold, color in self.bar_colors:
            if fraction > threshold:
                return color
        return self.bar_colors[-1][1]

    def _colored_bar(self, bar: HealthBarRenderData) -> str:
        plain = render_bar(bar.health, bar.side, width=bar.max_health)
        color = self._bar_color(bar)
        reset = self.terminal_codes["reset"]
        dim = self.terminal_codes["text_dim"]
        return "".join(
            f"{color}{char}{reset}" if char == FILL_SYMBOL else f"{dim}{EMPTY_SYMBOL}{reset}"
            for char in plain
        )

    def _styled(self, text: str, style: str) -> str:
        color = self.text_styles.get(style, "")
        if not color:
            return text
        return f"{color}{text}{self.terminal_codes['reset']}"

    def render_frame(self, context: RenderContext) -> None:
        self._buffer.clear()
        width = self.config.width

        if context.banner:
            self._buffer.append(self._styled(context.banner[:width], "banner"))
        if context.moves_line:
            self._buffer.append(self._styled(context.moves_line[:width], "moves"))

        if context.left_bar is not None and context.right_bar is not None:
            self._buffer.append(
                f"{context.left_bar.label} {self._colored_bar(context.left_bar)} VS "
                f"{self._colored_bar(context.right_bar)} {context.right_bar.label}"
            )

        if context.result_message:
            self._buffer.append(self._styled(context.result_message[:width], "result"))
        elif context.prompt:
            self._buffer.append(self._styled(context.prompt[:width], "prompt"))

        if self.show_log:
            for text in context.texts:
                self._buffer.append(self._styled(text.text[:width], text.style))

    def _ready(self, timeout: float = 0) -> bool:
        return bool(select.select([self.input_fd], [], [], timeout)[0])

    def _read_char(self) -> str:
        """Read one byte from the descriptor ``select`` watches, bypassing ``sys.stdin``'s buffer."""
        data = os.read(self.input_fd, 1)
        return data.decode("latin-1") if data else ""

    def get_input_events(self) -> list[InputEvent]:
        if not self._ready():
            return []

        key = self._read_char()

        if not key or key in INTERRUPT_CHARS:
            # Empty read means the input was closed
            return [InputEvent.quit_event()]

        if key == '\x1b':
            # Drop the rest of an escape sequence (arrow keys etc.)
            while self._ready(ESCAPE_SEQUENCE_TIMEOUT):
                if not self._read_char():
                    break

        return [InputEvent.from_char(key)]
