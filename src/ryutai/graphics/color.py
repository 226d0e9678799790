"""Color helpers.

Colors are configured in HSB with hue 0-360 and saturation/brightness
0-100; the canvas works in 8-bit RGB.
"""

from typing import Tuple

Color = Tuple[int, int, int]
HSB = Tuple[float, float, float]


def hsv_to_rgb(h: float, s: float, v: float) -> Color:
    """Convert HSV (h in degrees, s and v in 0-1) to RGB."""
    h = h % 360
    s = max(0.0, min(1.0, s))
    v = max(0.0, min(1.0, v))
    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c

    if h < 60:
        r, g, b = c, x, 0
    elif h < 120:
        r, g, b = x, c, 0
    elif h < 180:
        r, g, b = 0, c, x
    elif h < 240:
        r, g, b = 0, x, c
    elif h < 300:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    return (round((r + m) * 255), round((g + m) * 255), round((b + m) * 255))


def hsb_to_rgb(color: HSB) -> Color:
    """Convert an (h 0-360, s 0-100, b 0-100) triple to RGB."""
    h, s, b = color
    return hsv_to_rgb(h, s / 100, b / 100)


def alpha_fraction(alpha: float) -> float:
    """Map a 0-100 alpha to the 0.0-1.0 range used by the canvas."""
    return max(0.0, min(1.0, alpha / 100))
