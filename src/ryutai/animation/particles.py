"""Ryumyaku particles: energy units flowing along the dragon's spine.

Particles are born at the head (index 0), advance a constant number of
path indices per frame and expire at the tail. Their position is
interpolated between neighbouring path samples, then nudged sideways
according to the configured jitter mode.
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum
import logging
import math
import random

from ryutai.animation.noise import NoiseField
from ryutai.geometry import Path, Vec2
from ryutai.graphics.color import Color
from ryutai.graphics.primitives import BlendMode
from ryutai.graphics.renderer import Canvas

logger = logging.getLogger(__name__)

# Tolerance for comparing a summed index against the path end
INDEX_EPSILON = 1e-9


class JitterMode(str, Enum):
    """Lateral perturbation applied to rendered particle positions."""
    FIXED = "fixed"    # Offset chosen once at spawn
    RANDOM = "random"  # Fresh uniform draw every frame
    NOISE = "noise"    # Coherent noise, smooth over time


@dataclass
class ParticleConfig:
    """Configuration for spawned particles."""

    # Speed in path indices per frame
    speed_min: float = 0.3
    speed_max: float = 0.8

    # Disk diameter in pixels
    size_min: float = 2.0
    size_max: float = 6.0

    # Spawn-time lateral offset (FIXED mode)
    offset_min: float = -10.0
    offset_max: float = 10.0

    # Per-frame amplitude (RANDOM and NOISE modes)
    jitter: float = 2.0
    jitter_mode: JitterMode = JitterMode.FIXED
    noise_scale: float = 0.01
    noise_time_scale: float = 0.05

    # Appearance
    palette: Tuple[Color, ...] = ((255, 204, 51), (51, 187, 255))
    alpha: float = 0.8
    glow: float = 2.0  # Halo diameter relative to size (0 = no halo)
    glow_alpha: float = 0.15


@dataclass
class EnergyParticle:
    """A single unit of energy travelling along the path."""

    index: float = 0.0
    speed: float = 0.5
    size: float = 4.0
    color: Color = (255, 255, 255)
    offset: float = 0.0
    phase: float = 0.0  # Noise-space offset so particles sway independently
    x: float = 0.0
    y: float = 0.0
    finished: bool = False

    @property
    def position(self) -> Vec2:
        return Vec2(self.x, self.y)

    def is_past_end(self, path_length: int) -> bool:
        """True once index has reached the last sample (N-1).

        The index is a running sum of `speed`, so it can fall short of N-1
        by accumulated rounding on the tick it should arrive; INDEX_EPSILON
        absorbs that.
        """
        return self.index >= path_length - 1 - INDEX_EPSILON


def interpolate_along(path: Path, index: float) -> Vec2:
    """Point at a continuous index along the path.

    The segment index is clamped to [0, N-2] and the blend factor to
    [0, 1], so indices outside the path never read past its ends.
    """
    n = len(path)
    if n == 0:
        return Vec2(0.0, 0.0)
    if n == 1:
        return path[0]

    segment = min(max(int(math.floor(index)), 0), n - 2)
    amount = min(max(index - segment, 0.0), 1.0)
    return path[segment].lerp(path[segment + 1], amount)


class ParticleSystem:
    """Owns the live particles and their spawn / tick / cull / render cycle.

    Args:
        config: Particle configuration
        rng: Random source for spawn parameters and RANDOM jitter
        noise: Noise field for NOISE jitter (created from rng when omitted)
    """

    def __init__(
        self,
        config: Optional[ParticleConfig] = None,
        rng: Optional[random.Random] = None,
        noise: Optional[NoiseField] = None,
    ):
        self.config = config or ParticleConfig()
        self.rng = rng or random.Random()
        self.noise = noise or NoiseField(seed=self.rng.randint(0, 65535))
        self.particles: List[EnergyParticle] = []

    def __len__(self) -> int:
        return len(self.particles)

    @property
    def live_count(self) -> int:
        """Number of particles that have not reached the tail."""
        return sum(1 for p in self.particles if not p.finished)

    def spawn(self, path: Optional[Path] = None) -> EnergyParticle:
        """Create one particle at the head of the path."""
        cfg = self.config
        rng = self.rng

        particle = EnergyParticle(
            index=0.0,
            speed=rng.uniform(cfg.speed_min, cfg.speed_max),
            size=rng.uniform(cfg.size_min, cfg.size_max),
            color=rng.choice(cfg.palette),
            offset=rng.uniform(cfg.offset_min, cfg.offset_max),
            phase=rng.uniform(0.0, 1000.0),
        )
        if path:
            particle.x, particle.y = path[0].x, path[0].y

        self.particles.append(particle)
        return particle

    def _jitter(self, particle: EnergyParticle, point: Vec2, frame: int) -> Tuple[float, float]:
        cfg = self.config
        if cfg.jitter_mode is JitterMode.RANDOM:
            return (
                self.rng.uniform(-cfg.jitter, cfg.jitter),
                self.rng.uniform(-cfg.jitter, cfg.jitter),
            )
        if cfg.jitter_mode is JitterMode.NOISE:
            nx = point.x * cfg.noise_scale + particle.phase
            ny = point.y * cfg.noise_scale
            nt = frame * cfg.noise_time_scale
            return (
                self.noise.signed(nx, ny, nt) * cfg.jitter,
                self.noise.signed(nx + 31.7, ny + 47.3, nt) * cfg.jitter,
            )
        return particle.offset, particle.offset

    def tick(self, path: Path, frame: int = 0) -> None:
        """Advance every live particle and update its rendered position."""
        n = len(path)
        for particle in self.particles:
            if particle.finished:
                continue

            particle.index += particle.speed
            if particle.is_past_end(n):
                particle.finished = True
                continue

            point = interpolate_along(path, particle.index)
            dx, dy = self._jitter(particle, point, frame)
            particle.x = point.x + dx
            particle.y = point.y + dy

    def cull(self) -> int:
        """Remove finished particles, returning how many were removed."""
        before = len(self.particles)
        self.particles = [p for p in self.particles if not p.finished]
        return before - len(self.particles)

    def expire_beyond(self, path_length: int) -> int:
        """Mark particles past the end of a (shorter) path as finished."""
        expired = 0
        for particle in self.particles:
            if not particle.finished and particle.is_past_end(path_length):
                particle.finished = True
                expired += 1
        return expired

    def render(self, canvas: Canvas) -> None:
        """Draw live particles as glowing disks with additive blending."""
        cfg = self.config
        with canvas.composite_mode(BlendMode.ADDITIVE):
            for particle in self.particles:
                if particle.finished:
                    continue
                if cfg.glow > 0:
                    halo = particle.size * cfg.glow
                    canvas.fill_ellipse(particle.x, particle.y, halo, halo, particle.color, cfg.glow_alpha)
                canvas.fill_ellipse(
                    particle.x, particle.y, particle.size, particle.size, particle.color, cfg.alpha
                )

    def clear(self) -> None:
        """Remove all particles."""
        self.particles.clear()
