"""Path generation from control points via Catmull-Rom interpolation.

The dragon's spine is described by a handful of normalized control points
(head in the north-east, tail in the south-west). `generate_path` scales
them to the canvas and samples a smooth curve through every one of them.
"""

from typing import List, Sequence, Tuple
import logging
import math

from ryutai.geometry.vector import Vec2

logger = logging.getLogger(__name__)

# Sampled spine of the dragon
Path = Tuple[Vec2, ...]

# Archipelago silhouette: Hokkaido (head) down to the Sakishima islands (tail)
ARCHIPELAGO: Tuple[Vec2, ...] = (
    Vec2(0.85, 0.20),  # Hokkaido (head)
    Vec2(0.80, 0.35),  # northern Tohoku
    Vec2(0.72, 0.45),  # southern Tohoku
    Vec2(0.65, 0.55),  # Kanto / Chubu bend
    Vec2(0.55, 0.60),  # Kinki
    Vec2(0.40, 0.62),  # Chugoku / Shikoku
    Vec2(0.25, 0.70),  # Kyushu (hips)
    Vec2(0.15, 0.80),  # Nansei islands (tail)
    Vec2(0.10, 0.85),  # Sakishima (tail tip)
)

# First prototype: a sine-modulated diagonal from upper right to lower left
PROTOTYPE: Tuple[Vec2, ...] = (
    Vec2(0.80, 0.20),
    Vec2(0.65, 0.45),
    Vec2(0.50, 0.50),
    Vec2(0.35, 0.55),
    Vec2(0.20, 0.80),
)

PRESETS = {
    "archipelago": ARCHIPELAGO,
    "prototype": PROTOTYPE,
}

MIN_CONTROL_POINTS = 4


def catmull_rom(t: float, coords: Sequence[float]) -> float:
    """Evaluate a Catmull-Rom spline through coords at parameter t.

    Neighbour indices are clamped to the valid range, so the curve passes
    through the first and last coordinate without extrapolation.

    Args:
        t: Curve parameter in [0, 1] (clamped)
        coords: Ordered 1D control values

    Returns:
        Interpolated value (0.0 for an empty sequence)
    """
    length = len(coords)
    if length == 0:
        return 0.0

    t = max(0.0, min(1.0, t))
    last = length - 1
    p = last * t
    i = min(int(math.floor(p)), last)
    w = p - i

    c0 = coords[max(0, i - 1)]
    c1 = coords[i]
    c2 = coords[min(last, i + 1)]
    c3 = coords[min(last, i + 2)]

    return 0.5 * (
        (2 * c1)
        + (-c0 + c2) * w
        + (2 * c0 - 5 * c1 + 4 * c2 - c3) * w * w
        + (-c0 + 3 * c1 - 3 * c2 + c3) * w * w * w
    )


def sample_parameters(sample_step: float) -> List[float]:
    """Return t = 0, step, 2*step, ... always ending with t = 1."""
    if not 0 < sample_step <= 1:
        raise ValueError(f"sample_step must be in (0, 1], got {sample_step}")

    # Tolerance keeps 1/0.02 from rounding up to 51 intervals
    count = max(1, math.ceil(1.0 / sample_step - 1e-9))
    return [i * sample_step for i in range(count)] + [1.0]


def generate_path(
    control_points: Sequence[Vec2],
    width: float,
    height: float,
    sample_step: float = 0.02,
) -> Path:
    """Sample the spine through control_points scaled to the canvas.

    Degenerate geometry never raises: a zero-size canvas collapses every
    point onto the origin and short control sequences are handled by the
    clamped neighbour policy.
    """
    width = max(0.0, float(width))
    height = max(0.0, float(height))

    if len(control_points) < MIN_CONTROL_POINTS:
        logger.warning(
            f"Path built from {len(control_points)} control points "
            f"(expected at least {MIN_CONTROL_POINTS})"
        )

    xs = [p.x * width for p in control_points]
    ys = [p.y * height for p in control_points]

    path = tuple(
        Vec2(catmull_rom(t, xs), catmull_rom(t, ys))
        for t in sample_parameters(sample_step)
    )

    logger.debug(f"Generated path: {len(path)} points for {width:.0f}x{height:.0f}")
    return path


def resolve_control_points(
    preset: str,
    override: Sequence[Tuple[float, float]] | None = None,
) -> Tuple[Vec2, ...]:
    """Pick the configured control points (explicit override wins)."""
    if override:
        return tuple(Vec2(float(x), float(y)) for x, y in override)
    try:
        return PRESETS[preset]
    except KeyError:
        raise ValueError(f"Unknown path preset: {preset!r}") from None
