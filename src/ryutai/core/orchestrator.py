"""Per-frame driver tying the path, body, particles and clock together."""

from dataclasses import dataclass, replace
from typing import Optional, Sequence
import logging
import random

from ryutai.animation.body import BodyRenderer
from ryutai.animation.noise import NoiseField
from ryutai.animation.particles import ParticleSystem
from ryutai.core.clock import ClockReading, ClockSource, SystemClock
from ryutai.geometry import Path, Vec2, generate_path
from ryutai.graphics.clock_view import DigitalClockView
from ryutai.graphics.color import Color, hsb_to_rgb, alpha_fraction
from ryutai.graphics.renderer import Canvas
from ryutai.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationState:
    """Everything that changes from frame to frame, besides particles."""
    path: Path
    width: int
    height: int
    frame: int = 0


class FrameOrchestrator:
    """Runs one frame per tick and reacts to canvas resizes.

    Owns the simulation state exclusively; components receive the path and
    frame counter as arguments and never keep their own copies.
    """

    def __init__(
        self,
        canvas: Canvas,
        control_points: Sequence[Vec2],
        *,
        sample_step: float = 0.02,
        spawn_interval: int = 4,
        particles: Optional[ParticleSystem] = None,
        body: Optional[BodyRenderer] = None,
        clock: Optional[ClockSource] = None,
        clock_view: Optional[DigitalClockView] = None,
        background: Color = (0, 0, 0),
        trail_alpha: float = 0.25,
    ):
        if spawn_interval < 1:
            raise ValueError(f"spawn_interval must be >= 1, got {spawn_interval}")

        self.canvas = canvas
        self.control_points = tuple(control_points)
        self.sample_step = sample_step
        self.spawn_interval = spawn_interval
        # ParticleSystem defines __len__, so an empty one is falsy: test for None
        self.particles = particles if particles is not None else ParticleSystem()
        self.body = body if body is not None else BodyRenderer()
        self.clock = clock if clock is not None else SystemClock()
        self.clock_view = clock_view if clock_view is not None else DigitalClockView()
        self.background = background
        self.trail_alpha = trail_alpha

        self.state = SimulationState(
            path=generate_path(self.control_points, canvas.width, canvas.height, sample_step),
            width=canvas.width,
            height=canvas.height,
        )
        self.last_reading: Optional[ClockReading] = None

        logger.info(
            f"FrameOrchestrator ready: {canvas.width}x{canvas.height}, "
            f"{len(self.control_points)} control points, {len(self.path)} path samples"
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        width: Optional[int] = None,
        height: Optional[int] = None,
        clock: Optional[ClockSource] = None,
    ) -> "FrameOrchestrator":
        """Build the orchestrator and its components from settings."""
        rng = random.Random(settings.seed)
        noise = NoiseField(seed=rng.randint(0, 65535))
        background = hsb_to_rgb(settings.display.background)

        canvas = Canvas(
            width or settings.display.width,
            height or settings.display.height,
            background,
        )
        return cls(
            canvas,
            settings.path.resolve(),
            sample_step=settings.path.sample_step,
            spawn_interval=settings.particles.spawn_interval,
            particles=ParticleSystem(settings.particles.to_config(), rng=rng, noise=noise),
            body=BodyRenderer(settings.body.to_config(), noise=noise, rng=rng),
            clock=clock,
            clock_view=DigitalClockView(settings.clock_view.to_config()),
            background=background,
            trail_alpha=alpha_fraction(settings.display.trail_alpha),
        )

    @property
    def path(self) -> Path:
        return self.state.path

    @property
    def frame(self) -> int:
        return self.state.frame

    def resize(self, width: int, height: int) -> None:
        """Resize the canvas and swap in a freshly generated path."""
        self.canvas.resize(width, height)
        path = generate_path(self.control_points, self.canvas.width, self.canvas.height, self.sample_step)
        self.state = replace(self.state, path=path, width=self.canvas.width, height=self.canvas.height)

        # Particles past the new tail are removed by the next cull
        expired = self.particles.expire_beyond(len(path))
        logger.info(f"Resized to {self.canvas.width}x{self.canvas.height} ({expired} particles expired)")

    def tick(self) -> ClockReading:
        """Advance and draw one frame."""
        self.state = replace(self.state, frame=self.state.frame + 1)
        frame, path = self.state.frame, self.state.path

        self.canvas.fade(self.background, self.trail_alpha)
        self.body.render(self.canvas, path, frame)

        if frame % self.spawn_interval == 0:
            self.particles.spawn(path)
        self.particles.tick(path, frame)
        self.particles.render(self.canvas)
        self.particles.cull()

        reading = self.clock.now()
        self.clock_view.render(self.canvas, reading.hour, reading.minute, reading.second)
        self.last_reading = reading
        return reading
