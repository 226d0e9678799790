"""Coherent noise for organic sway and particle jitter."""

from typing import List
import math
import random


class PerlinNoise:
    """Seeded 3D Perlin gradient noise.

    Nearby inputs give nearby outputs, so sampling along (x, y, frame)
    produces smooth undulation rather than per-frame flicker.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed if seed is not None else random.randint(0, 65535)
        self._perm = self._generate_permutation()

    def _generate_permutation(self) -> List[int]:
        """Generate permutation table."""
        rng = random.Random(self.seed)
        perm = list(range(256))
        rng.shuffle(perm)
        return perm + perm  # Double for overflow handling

    @staticmethod
    def _fade(t: float) -> float:
        """Fade function for smooth interpolation."""
        return t * t * t * (t * (t * 6 - 15) + 10)

    @staticmethod
    def _lerp(a: float, b: float, t: float) -> float:
        return a + t * (b - a)

    @staticmethod
    def _grad(hash_val: int, x: float, y: float, z: float) -> float:
        """Dot product with one of 12 cube-edge gradients."""
        h = hash_val & 15
        u = x if h < 8 else y
        if h < 4:
            v = y
        elif h in (12, 14):
            v = x
        else:
            v = z
        return (u if h & 1 == 0 else -u) + (v if h & 2 == 0 else -v)

    def noise3d(self, x: float, y: float, z: float) -> float:
        """Raw gradient noise, roughly in [-1, 1]."""
        fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
        xi = int(fx) & 255
        yi = int(fy) & 255
        zi = int(fz) & 255

        xf = x - fx
        yf = y - fy
        zf = z - fz

        u = self._fade(xf)
        v = self._fade(yf)
        w = self._fade(zf)

        perm = self._perm
        a = perm[xi] + yi
        aa = perm[a] + zi
        ab = perm[a + 1] + zi
        b = perm[xi + 1] + yi
        ba = perm[b] + zi
        bb = perm[b + 1] + zi

        lerp, grad = self._lerp, self._grad
        x1 = lerp(grad(perm[aa], xf, yf, zf), grad(perm[ba], xf - 1, yf, zf), u)
        x2 = lerp(grad(perm[ab], xf, yf - 1, zf), grad(perm[bb], xf - 1, yf - 1, zf), u)
        y1 = lerp(x1, x2, v)

        x1 = lerp(grad(perm[aa + 1], xf, yf, zf - 1), grad(perm[ba + 1], xf - 1, yf, zf - 1), u)
        x2 = lerp(grad(perm[ab + 1], xf, yf - 1, zf - 1), grad(perm[bb + 1], xf - 1, yf - 1, zf - 1), u)
        y2 = lerp(x1, x2, v)

        return lerp(y1, y2, w)


class NoiseField:
    """Fractal Perlin noise sampled by position and time.

    Args:
        seed: Permutation seed (random when None)
        octaves: Number of layered noise octaves
        falloff: Amplitude multiplier between octaves
    """

    def __init__(self, seed: int | None = None, octaves: int = 4, falloff: float = 0.5):
        self._perlin = PerlinNoise(seed)
        self.octaves = max(1, octaves)
        self.falloff = falloff

    @property
    def seed(self) -> int:
        return self._perlin.seed

    def sample(self, x: float, y: float = 0.0, t: float = 0.0) -> float:
        """Noise value in [0, 1], continuous in x, y and t."""
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0

        for _ in range(self.octaves):
            value += amplitude * self._perlin.noise3d(x * frequency, y * frequency, t * frequency)
            max_value += amplitude
            amplitude *= self.falloff
            frequency *= 2.0

        normalized = (value / max_value + 1) / 2
        return max(0.0, min(1.0, normalized))

    def signed(self, x: float, y: float = 0.0, t: float = 0.0) -> float:
        """Noise value in [-1, 1]."""
        return self.sample(x, y, t) * 2 - 1
