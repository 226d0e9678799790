"""Graphics module for RYUTAI rendering."""

from ryutai.graphics.renderer import Canvas
from ryutai.graphics.primitives import (
    BlendMode,
    clear,
    fade,
    fill_ellipse,
    fill_rect,
    stroke_polyline,
    draw_text,
    measure_text,
)
from ryutai.graphics.color import hsv_to_rgb, hsb_to_rgb, alpha_fraction
from ryutai.graphics.clock_view import ClockViewConfig, DigitalClockView, format_time

__all__ = [
    # Canvas
    "Canvas",
    "BlendMode",
    # Primitives
    "clear",
    "fade",
    "fill_ellipse",
    "fill_rect",
    "stroke_polyline",
    "draw_text",
    "measure_text",
    # Color
    "hsv_to_rgb",
    "hsb_to_rgb",
    "alpha_fraction",
    # Clock view
    "ClockViewConfig",
    "DigitalClockView",
    "format_time",
]
