"""Canvas: the render surface every component draws on."""

from contextlib import contextmanager
from typing import Iterator, Sequence, Tuple
import logging
import numpy as np
from numpy.typing import NDArray

from ryutai.graphics.color import Color
from ryutai.graphics.primitives import (
    BlendMode,
    PointLike,
    clear,
    fade,
    fill_ellipse,
    stroke_polyline,
    draw_text,
    measure_text,
)

logger = logging.getLogger(__name__)


class Canvas:
    """RGB pixel canvas backed by a (height, width, 3) uint8 buffer.

    The current blend mode is canvas-wide state, like a 2D context's
    composite operation. Change it only through `composite_mode()` so it
    is always restored.
    """

    def __init__(self, width: int, height: int, background: Color = (0, 0, 0)):
        self.background = background
        self.blend_mode = BlendMode.NORMAL
        self._buffer = self._allocate(width, height)

    def _allocate(self, width: int, height: int) -> NDArray[np.uint8]:
        buffer = np.zeros((max(0, int(height)), max(0, int(width)), 3), dtype=np.uint8)
        clear(buffer, self.background)
        return buffer

    @property
    def width(self) -> int:
        return self._buffer.shape[1]

    @property
    def height(self) -> int:
        return self._buffer.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def buffer(self) -> NDArray[np.uint8]:
        """Live pixel buffer (height, width, 3)."""
        return self._buffer

    def resize(self, width: int, height: int) -> None:
        """Replace the buffer with a fresh one of the new size."""
        self._buffer = self._allocate(width, height)
        logger.debug(f"Canvas resized to {self.width}x{self.height}")

    @contextmanager
    def composite_mode(self, mode: BlendMode) -> Iterator["Canvas"]:
        """Temporarily switch the blend mode; restored on every exit path."""
        previous = self.blend_mode
        self.blend_mode = mode
        try:
            yield self
        finally:
            self.blend_mode = previous

    def fade(self, color: Color, alpha: float) -> None:
        """Partially cover the canvas with color (trail effect)."""
        fade(self._buffer, color, alpha)

    def stroke_polyline(
        self,
        points: Sequence[PointLike],
        color: Color,
        thickness: float = 1.0,
        alpha: float = 1.0,
    ) -> None:
        stroke_polyline(self._buffer, points, color, thickness, alpha, self.blend_mode)

    def fill_ellipse(
        self,
        cx: float,
        cy: float,
        width: float,
        height: float,
        color: Color,
        alpha: float = 1.0,
    ) -> None:
        fill_ellipse(self._buffer, cx, cy, width, height, color, alpha, self.blend_mode)

    def draw_text_centered(
        self,
        text: str,
        cx: float,
        cy: float,
        color: Color,
        scale: int = 1,
        alpha: float = 1.0,
    ) -> Tuple[int, int]:
        """Draw bitmap text centered on (cx, cy)."""
        scale = max(1, int(scale))
        text_w, text_h = measure_text(text, scale)
        x = int(round(cx - text_w / 2))
        y = int(round(cy - text_h / 2))
        return draw_text(self._buffer, text, x, y, color, scale, alpha)
