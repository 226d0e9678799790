"""Basic drawing primitives on numpy RGB buffers.

All primitives take a (height, width, 3) uint8 buffer, clip to its bounds
and blend with a per-call alpha. `BlendMode.ADDITIVE` accumulates light
where shapes overlap (the "lighter" composite of a 2D canvas).
"""

from enum import Enum, auto
from typing import Optional, Sequence, Tuple
import math
import numpy as np
from numpy.typing import NDArray

from ryutai.graphics.color import Color

# Type aliases
Buffer = NDArray[np.uint8]
Mask = NDArray[np.bool_]
PointLike = Tuple[float, float]


class BlendMode(Enum):
    """How source pixels combine with the buffer."""
    NORMAL = auto()    # source-over
    ADDITIVE = auto()  # lighter


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def fade(buffer: Buffer, color: Color, alpha: float) -> None:
    """Blend the whole buffer toward color, leaving afterimage trails."""
    if alpha <= 0:
        return
    if alpha >= 1:
        clear(buffer, color)
        return
    target = np.asarray(color, dtype=np.float32)
    blended = buffer.astype(np.float32) * (1 - alpha) + target * alpha
    buffer[:] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)


def _blend_masked(
    region: Buffer,
    mask: Mask,
    color: Color,
    alpha: float,
    mode: BlendMode,
) -> None:
    """Blend color into region where mask is set (region may be a view)."""
    if alpha <= 0 or not mask.any():
        return
    src = np.asarray(color, dtype=np.float32) * alpha
    current = region[mask].astype(np.float32)
    if mode is BlendMode.ADDITIVE:
        blended = current + src
    else:
        blended = current * (1 - alpha) + src
    region[mask] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)


def fill_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    width: float,
    height: float,
    color: Color,
    alpha: float = 1.0,
    mode: BlendMode = BlendMode.NORMAL,
) -> None:
    """Draw a filled, axis-aligned ellipse.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        width: Ellipse diameter along x
        height: Ellipse diameter along y
        color: RGB color tuple
        alpha: Opacity (0.0 to 1.0)
        mode: Blend mode
    """
    if not all(math.isfinite(v) for v in (cx, cy, width, height)):
        return

    h, w = buffer.shape[:2]
    rx = max(abs(width) / 2, 0.5)
    ry = max(abs(height) / 2, 0.5)

    x1 = max(0, int(math.floor(cx - rx)))
    y1 = max(0, int(math.floor(cy - ry)))
    x2 = min(w, int(math.ceil(cx + rx)) + 1)
    y2 = min(h, int(math.ceil(cy + ry)) + 1)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = ((xs - cx) / rx) ** 2 + ((ys - cy) / ry) ** 2 <= 1.0

    if not mask.any():
        # Sub-pixel ellipse: light the nearest pixel
        px, py = int(round(cx)) - x1, int(round(cy)) - y1
        if 0 <= py < mask.shape[0] and 0 <= px < mask.shape[1]:
            mask[py, px] = True

    _blend_masked(buffer[y1:y2, x1:x2], mask, color, alpha, mode)


def polyline_mask(
    shape: Tuple[int, int],
    points: Sequence[PointLike],
    thickness: float,
) -> Mask:
    """Pixels within thickness/2 of any segment of the polyline."""
    h, w = shape
    mask = np.zeros((h, w), dtype=bool)
    radius = max(thickness / 2, 0.5)

    finite = [(x, y) for x, y in points if math.isfinite(x) and math.isfinite(y)]
    if not finite:
        return mask
    if len(finite) == 1:
        finite = finite * 2

    for (ax, ay), (bx, by) in zip(finite, finite[1:]):
        x1 = max(0, int(math.floor(min(ax, bx) - radius)))
        y1 = max(0, int(math.floor(min(ay, by) - radius)))
        x2 = min(w, int(math.ceil(max(ax, bx) + radius)) + 1)
        y2 = min(h, int(math.ceil(max(ay, by) + radius)) + 1)
        if x2 <= x1 or y2 <= y1:
            continue

        ys, xs = np.ogrid[y1:y2, x1:x2]
        dx, dy = bx - ax, by - ay
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            t = 0.0
        else:
            t = np.clip(((xs - ax) * dx + (ys - ay) * dy) / length_sq, 0.0, 1.0)
        dist_sq = (xs - (ax + t * dx)) ** 2 + (ys - (ay + t * dy)) ** 2
        mask[y1:y2, x1:x2] |= dist_sq <= radius * radius

    return mask


def stroke_polyline(
    buffer: Buffer,
    points: Sequence[PointLike],
    color: Color,
    thickness: float = 1.0,
    alpha: float = 1.0,
    mode: BlendMode = BlendMode.NORMAL,
) -> None:
    """Stroke an open polyline with round joins.

    The whole stroke is blended once, so overlapping segments do not
    darken or brighten the joints.
    """
    mask = polyline_mask(buffer.shape[:2], points, thickness)
    _blend_masked(buffer, mask, color, alpha, mode)


def fill_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    alpha: float = 1.0,
    mode: BlendMode = BlendMode.NORMAL,
) -> None:
    """Fill a rectangle, clamped to buffer bounds."""
    h, w = buffer.shape[:2]
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    if x2 <= x1 or y2 <= y1:
        return
    region = buffer[y1:y2, x1:x2]
    _blend_masked(region, np.ones(region.shape[:2], dtype=bool), color, alpha, mode)


GLYPH_WIDTH = 3
GLYPH_HEIGHT = 5


def measure_text(text: str, scale: int = 1) -> Tuple[int, int]:
    """Size in pixels of text rendered with the bitmap font."""
    if not text:
        return 0, 0
    return len(text) * (GLYPH_WIDTH + 1) * scale - scale, GLYPH_HEIGHT * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    scale: int = 1,
    alpha: float = 1.0,
    font: Optional[dict] = None,
) -> Tuple[int, int]:
    """Draw text using a bitmap font.

    Args:
        buffer: Target numpy array (height, width, 3)
        text: Text string to draw
        x: Left edge
        y: Top edge
        color: RGB color tuple
        scale: Pixel size of one font dot
        alpha: Opacity (0.0 to 1.0)
        font: Bitmap font dictionary (char -> rows). Uses built-in if None.

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = _get_default_font()

    scale = max(1, int(scale))
    cursor_x = x

    for char in text:
        glyph = font.get(char.upper(), font.get('?', []))
        for row_idx, row in enumerate(glyph):
            for col_idx, pixel in enumerate(row):
                if pixel:
                    fill_rect(
                        buffer,
                        cursor_x + col_idx * scale,
                        y + row_idx * scale,
                        scale,
                        scale,
                        color,
                        alpha,
                    )
        cursor_x += (GLYPH_WIDTH + 1) * scale

    return measure_text(text, scale)


def _get_default_font() -> dict:
    """Return a 3x5 bitmap font with the characters a clock needs."""
    return {
        ' ': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,0,0]],
        '0': [[1,1,1], [1,0,1], [1,0,1], [1,0,1], [1,1,1]],
        '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
        '2': [[1,1,1], [0,0,1], [1,1,1], [1,0,0], [1,1,1]],
        '3': [[1,1,1], [0,0,1], [0,1,1], [0,0,1], [1,1,1]],
        '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
        '5': [[1,1,1], [1,0,0], [1,1,1], [0,0,1], [1,1,1]],
        '6': [[1,1,1], [1,0,0], [1,1,1], [1,0,1], [1,1,1]],
        '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
        '8': [[1,1,1], [1,0,1], [1,1,1], [1,0,1], [1,1,1]],
        '9': [[1,1,1], [1,0,1], [1,1,1], [0,0,1], [1,1,1]],
        ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
        '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
        '?': [[1,1,0], [0,0,1], [0,1,0], [0,0,0], [0,1,0]],
    }
