"""Digital time readout drawn over the dragon."""

from typing import Tuple
from dataclasses import dataclass

from ryutai.graphics.color import Color
from ryutai.graphics.primitives import GLYPH_HEIGHT
from ryutai.graphics.renderer import Canvas


@dataclass
class ClockViewConfig:
    """Layout of the readout (positions are fractions of the canvas)."""

    time_position: Tuple[float, float] = (0.25, 0.25)
    seconds_position: Tuple[float, float] = (0.25, 0.33)
    time_size_ratio: float = 0.12  # Text height relative to min(width, height)
    seconds_size_ratio: float = 0.04
    time_color: Color = (255, 255, 255)
    time_alpha: float = 0.9
    seconds_color: Color = (255, 255, 255)
    seconds_alpha: float = 0.9


def format_time(hour: int, minute: int, second: int) -> Tuple[str, str]:
    """Zero-padded ("HH:MM", "SS")."""
    return f"{hour:02d}:{minute:02d}", f"{second:02d}"


def _scale_for(canvas: Canvas, ratio: float) -> int:
    return max(1, round(min(canvas.width, canvas.height) * ratio / GLYPH_HEIGHT))


class DigitalClockView:
    """Draws HH:MM large and SS small at configured positions."""

    def __init__(self, config: ClockViewConfig | None = None):
        self.config = config or ClockViewConfig()

    def render(self, canvas: Canvas, hour: int, minute: int, second: int) -> None:
        cfg = self.config
        hh_mm, ss = format_time(hour, minute, second)

        tx, ty = cfg.time_position
        canvas.draw_text_centered(
            hh_mm,
            canvas.width * tx,
            canvas.height * ty,
            cfg.time_color,
            scale=_scale_for(canvas, cfg.time_size_ratio),
            alpha=cfg.time_alpha,
        )

        sx, sy = cfg.seconds_position
        canvas.draw_text_centered(
            ss,
            canvas.width * sx,
            canvas.height * sy,
            cfg.seconds_color,
            scale=_scale_for(canvas, cfg.seconds_size_ratio),
            alpha=cfg.seconds_alpha,
        )
