"""2D point type used for control points, paths and particle positions."""

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D point / vector."""

    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, sx: float, sy: float | None = None) -> "Vec2":
        """Scale each axis (uniformly when sy is omitted)."""
        if sy is None:
            sy = sx
        return Vec2(self.x * sx, self.y * sy)

    def offset(self, dx: float, dy: float) -> "Vec2":
        """Return a copy moved by (dx, dy)."""
        return Vec2(self.x + dx, self.y + dy)

    def lerp(self, other: "Vec2", amount: float) -> "Vec2":
        """Linear interpolation toward other (amount 0.0 -> self, 1.0 -> other)."""
        return Vec2(
            self.x + (other.x - self.x) * amount,
            self.y + (other.y - self.y) * amount,
        )

    def distance(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)
