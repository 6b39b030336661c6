from dataclasses import dataclass, field
from typing import Optional

from .game_enums import Side


BAR_WIDTH = 10
FILL_SYMBOL = "#"
EMPTY_SYMBOL = "-"


def render_bar(health: int, side: Side, fill: str = FILL_SYMBOL, empty: str = EMPTY_SYMBOL,
               width: int = BAR_WIDTH) -> str:
    """Render a health bar as a fixed-width string.

    The left bar fills from its right edge inward and the right bar from its
    left edge inward, so both bars drain away from the centre.
    """
    chars = []
    for index in range(width):
        if side == Side.LEFT:
            chars.append(empty if index < width - health else fill)
        else:
            chars.append(fill if index < health else empty)
    return "".join(chars)


@dataclass
class HealthBarRenderData:
    """Health bar for one side.

    This is the OUTPUT data structure handed to renderers; it carries only
    what is needed to draw the bar.
    """
    side: Side
    label: str                  # "YOU" / "CPU"
    health: int
    max_health: int = BAR_WIDTH

    @property
    def bar(self) -> str:
        return render_bar(self.health, self.side, width=self.max_health)

    @property
    def hp_percent(self) -> float:
        return self.health / max(self.max_health, 1)


@dataclass
class TextRenderData:
    text: str
    style: str = "normal"       # "normal", "banner", "moves", "prompt", "result", "log"


@dataclass
class RenderContext:
    left_bar: Optional[HealthBarRenderData] = None
    right_bar: Optional[HealthBarRenderData] = None

    banner: Optional[str] = None
    moves_line: Optional[str] = None
    prompt: Optional[str] = None
    result_message: Optional[str] = None

    texts: list[TextRenderData] = field(default_factory=list)
    log_messages: list[str] = field(default_factory=list)

    def header_line(self) -> str:
        """``YOU <bar> VS <bar> CPU``; empty when no bars are set."""
        if self.left_bar is None or self.right_bar is None:
            return ""
        return f"{self.left_bar.label} {self.left_bar.bar} VS {self.right_bar.bar} {self.right_bar.label}"

    def lines(self) -> list[str]:
        """Plain text lines in display order."""
        lines = []
        if self.banner:
            lines.append(self.banner)
        if self.moves_line:
            lines.append(self.moves_line)
        header = self.header_line()
        if header:
            lines.append(header)
        if self.result_message:
            lines.append(self.result_message)
        elif self.prompt:
            lines.append(self.prompt)
        lines.extend(text.text for text in self.texts)
        return lines
