"""Animation module for RYUTAI."""

from ryutai.animation.noise import NoiseField, PerlinNoise
from ryutai.animation.particles import (
    EnergyParticle,
    JitterMode,
    ParticleConfig,
    ParticleSystem,
    interpolate_along,
)
from ryutai.animation.body import BodyConfig, BodyRenderer, BlinkState, blink_state

__all__ = [
    # Noise
    "NoiseField",
    "PerlinNoise",
    # Particles
    "EnergyParticle",
    "JitterMode",
    "ParticleConfig",
    "ParticleSystem",
    "interpolate_along",
    # Body
    "BodyConfig",
    "BodyRenderer",
    "BlinkState",
    "blink_state",
]
