"""
Renderer interface.

Renderers only see :class:`RenderContext` objects built by the game and hand
back :class:`InputEvent` lists; they never touch the round state.
"""
from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass

from .renderable import RenderContext
from .input import InputEvent


@dataclass
class RendererConfig:
    width: int = 80
    height: int = 24
    title: str = "KPS Fighter"
    target_fps: int = 30


class Renderer(ABC):
    """Base class for the terminal and scripted renderers."""

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @abstractmethod
    def render_frame(self, context: RenderContext) -> None:
        """Lay out one frame; nothing is shown until :meth:`present`."""
        pass

    @abstractmethod
    def get_input_events(self) -> list[InputEvent]:
        """Return pending input without blocking."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def present(self) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        """Restore the display; safe to call when :meth:`start` never ran."""
        self._running = False
        self.cleanup()

    def draw(self, context: RenderContext) -> None:
        self.clear()
        self.render_frame(context)
        self.present()
