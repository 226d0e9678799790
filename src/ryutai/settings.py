"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested sections use a double underscore, e.g. RYUTAI_PARTICLES__SPAWN_INTERVAL=5.
"""

from functools import lru_cache
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ryutai.animation.particles import JitterMode, ParticleConfig
from ryutai.animation.body import BodyConfig
from ryutai.graphics.clock_view import ClockViewConfig
from ryutai.graphics.color import HSB, hsb_to_rgb, alpha_fraction
from ryutai.geometry import Vec2, resolve_control_points


class PathSettings(BaseModel):
    """Dragon spine geometry."""

    preset: Literal["archipelago", "prototype"] = "archipelago"
    # Normalized (x, y) pairs, head first; overrides the preset when set
    control_points: Optional[List[Tuple[float, float]]] = None
    sample_step: float = Field(default=0.02, gt=0.0, le=1.0)

    def resolve(self) -> Tuple[Vec2, ...]:
        return resolve_control_points(self.preset, self.control_points)


class ParticleSettings(BaseModel):
    """Energy (ryumyaku) particles flowing along the spine."""

    spawn_interval: int = Field(default=4, ge=1)  # frames between spawns
    speed_min: float = Field(default=0.3, gt=0.0)  # path indices per frame
    speed_max: float = Field(default=0.8, gt=0.0)
    size_min: float = Field(default=2.0, gt=0.0)
    size_max: float = Field(default=6.0, gt=0.0)
    offset_min: float = -10.0
    offset_max: float = 10.0
    jitter: float = Field(default=2.0, ge=0.0)
    jitter_mode: JitterMode = JitterMode.FIXED

    # Gold (energy) and blue (spirit)
    palette: List[HSB] = Field(default_factory=lambda: [(45.0, 80.0, 100.0), (200.0, 80.0, 100.0)])
    alpha: float = Field(default=80.0, ge=0.0, le=100.0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "ParticleSettings":
        if self.speed_min > self.speed_max:
            raise ValueError("speed_min must not exceed speed_max")
        if self.size_min > self.size_max:
            raise ValueError("size_min must not exceed size_max")
        if self.offset_min > self.offset_max:
            raise ValueError("offset_min must not exceed offset_max")
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        return self

    def to_config(self) -> ParticleConfig:
        return ParticleConfig(
            speed_min=self.speed_min,
            speed_max=self.speed_max,
            size_min=self.size_min,
            size_max=self.size_max,
            offset_min=self.offset_min,
            offset_max=self.offset_max,
            jitter=self.jitter,
            jitter_mode=self.jitter_mode,
            palette=tuple(hsb_to_rgb(c) for c in self.palette),
            alpha=alpha_fraction(self.alpha),
        )


class BodySettings(BaseModel):
    """Breathing dragon body, node markers and eye."""

    # Aura (wide outer glow)
    aura_color: HSB = (210.0, 60.0, 20.0)
    aura_alpha: float = 10.0
    aura_width_ratio: float = 0.12

    # Body (inner silhouette)
    body_color: HSB = (200.0, 40.0, 60.0)
    body_alpha: float = 60.0
    body_width_ratio: float = 0.03

    # Breathing: A*sin(speed*frame + phase*y), A = ratio*width
    breath_ratio: float = 0.005
    breath_speed: float = 0.03
    breath_phase: float = 0.01

    # Sway: noise(x*scale, y*scale, frame*time_scale)
    sway_scale: float = 0.01
    sway_time_scale: float = 0.01
    sway_ratio: float = 0.05

    # Body shake: noise(i*index_scale, frame*time_scale) -> [-shake, shake]
    shake: float = 5.0
    shake_index_scale: float = 0.1
    shake_time_scale: float = 0.02

    # Nodes (chakra points)
    node_spacing: int = Field(default=8, ge=1)
    node_size_min: float = 2.0
    node_size_max: float = 5.0
    node_color: HSB = (200.0, 80.0, 100.0)

    # Eye
    eye_enabled: bool = True
    eye_index: int = Field(default=2, ge=0)
    eye_lift: float = 10.0
    eye_width: float = 12.0
    eye_size: float = 12.0
    eye_blink_size: float = 1.0
    eye_color: HSB = (45.0, 100.0, 100.0)
    eye_glow: bool = True
    blink_freq: float = 0.1
    blink_threshold: float = 0.95

    def to_config(self) -> BodyConfig:
        return BodyConfig(
            aura_color=hsb_to_rgb(self.aura_color),
            aura_alpha=alpha_fraction(self.aura_alpha),
            aura_width_ratio=self.aura_width_ratio,
            body_color=hsb_to_rgb(self.body_color),
            body_alpha=alpha_fraction(self.body_alpha),
            body_width_ratio=self.body_width_ratio,
            breath_ratio=self.breath_ratio,
            breath_speed=self.breath_speed,
            breath_phase=self.breath_phase,
            sway_scale=self.sway_scale,
            sway_time_scale=self.sway_time_scale,
            sway_ratio=self.sway_ratio,
            shake=self.shake,
            shake_index_scale=self.shake_index_scale,
            shake_time_scale=self.shake_time_scale,
            node_spacing=self.node_spacing,
            node_size_min=self.node_size_min,
            node_size_max=self.node_size_max,
            node_color=hsb_to_rgb(self.node_color),
            eye_enabled=self.eye_enabled,
            eye_index=self.eye_index,
            eye_lift=self.eye_lift,
            eye_width=self.eye_width,
            eye_size=self.eye_size,
            eye_blink_size=self.eye_blink_size,
            eye_color=hsb_to_rgb(self.eye_color),
            eye_glow=self.eye_glow,
            blink_freq=self.blink_freq,
            blink_threshold=self.blink_threshold,
        )


class ClockViewSettings(BaseModel):
    """Digital readout layout (positions are fractions of the canvas)."""

    time_position: Tuple[float, float] = (0.25, 0.25)
    seconds_position: Tuple[float, float] = (0.25, 0.33)
    time_size_ratio: float = 0.12
    seconds_size_ratio: float = 0.04
    time_color: HSB = (0.0, 0.0, 100.0)
    time_alpha: float = 90.0
    seconds_color: HSB = (0.0, 0.0, 100.0)
    seconds_alpha: float = 90.0

    def to_config(self) -> ClockViewConfig:
        return ClockViewConfig(
            time_position=self.time_position,
            seconds_position=self.seconds_position,
            time_size_ratio=self.time_size_ratio,
            seconds_size_ratio=self.seconds_size_ratio,
            time_color=hsb_to_rgb(self.time_color),
            time_alpha=alpha_fraction(self.time_alpha),
            seconds_color=hsb_to_rgb(self.seconds_color),
            seconds_alpha=alpha_fraction(self.seconds_alpha),
        )


class DisplaySettings(BaseModel):
    """Window and frame settings."""

    width: int = Field(default=1280, ge=1)
    height: int = Field(default=720, ge=1)
    fps: int = Field(default=60, ge=1)
    fullscreen: bool = False
    title: str = "RYUTAI CLOCK"

    # Deep night blue, partially repainted every frame to leave trails
    background: HSB = (220.0, 80.0, 5.0)
    trail_alpha: float = Field(default=25.0, ge=0.0, le=100.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="RYUTAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    # Seeds noise and particle randomness; random when unset
    seed: Optional[int] = None

    # Nested settings
    path: PathSettings = Field(default_factory=PathSettings)
    particles: ParticleSettings = Field(default_factory=ParticleSettings)
    body: BodySettings = Field(default_factory=BodySettings)
    clock_view: ClockViewSettings = Field(default_factory=ClockViewSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
