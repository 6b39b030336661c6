from typing import Iterable, Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import RenderContext
from ..core.input import InputEvent


class SimpleRenderer(Renderer):
    """Plain ``print`` renderer driven by a scripted key sequence.

    Each call to :meth:`get_input_events` feeds the next scripted key. Once the
    script runs out a quit event is sent so unattended runs always terminate.
    """

    def __init__(self, config: Optional[RendererConfig] = None, script: Iterable[str] = "",
                 quiet: bool = False):
        super().__init__(config)
        self._script = [char for char in script if not char.isspace()]
        self._position = 0
        self._frame_count = 0
        self.quiet = quiet
        self.frames: list[list[str]] = []

    @property
    def script_exhausted(self) -> bool:
        return self._position >= len(self._script)

    def initialize(self) -> None:
        if not self.quiet:
            print(f"Initializing SimpleRenderer ({self.config.width}x{self.config.height})")
            print("=" * min(self.config.width, 40))

    def cleanup(self) -> None:
        if not self.quiet:
            print("\nSimpleRenderer cleanup complete")

    def clear(self) -> None:
        pass

    def present(self) -> None:
        pass

    def render_frame(self, context: RenderContext) -> None:
        self._frame_count += 1
        lines = [line[:self.config.width] for line in context.lines()]
        self.frames.append(lines)

        if self.quiet:
            return

        print(f"\n--- Frame {self._frame_count} ---")
        for line in lines:
            print(line)

    def get_input_events(self) -> list[InputEvent]:
        if self.script_exhausted:
            return [InputEvent.quit_event()]

        char = self._script[self._position]
        self._position += 1
        return [InputEvent.from_char(char)]
