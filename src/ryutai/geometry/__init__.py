"""Geometry: points and the spline-sampled dragon spine."""

from ryutai.geometry.vector import Vec2
from ryutai.geometry.spline import (
    Path,
    ARCHIPELAGO,
    PROTOTYPE,
    PRESETS,
    catmull_rom,
    generate_path,
    sample_parameters,
    resolve_control_points,
)

__all__ = [
    "Vec2",
    "Path",
    "ARCHIPELAGO",
    "PROTOTYPE",
    "PRESETS",
    "catmull_rom",
    "generate_path",
    "sample_parameters",
    "resolve_control_points",
]
