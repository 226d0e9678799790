import random

import pytest

from ryutai.animation.body import BodyRenderer
from ryutai.animation.noise import NoiseField
from ryutai.animation.particles import JitterMode, ParticleSystem
from ryutai.core.clock import ClockReading, FixedClock
from ryutai.core.orchestrator import FrameOrchestrator
from ryutai.geometry import ARCHIPELAGO
from ryutai.graphics.clock_view import DigitalClockView
from ryutai.graphics.renderer import Canvas
from ryutai.settings import Settings

from conftest import SilentCanvas


def _orchestrator(canvas, **kwargs) -> FrameOrchestrator:
    rng = random.Random(99)
    kwargs.setdefault("particles", ParticleSystem(rng=rng, noise=NoiseField(seed=1)))
    kwargs.setdefault("clock", FixedClock(ClockReading(10, 30, 0)))
    return FrameOrchestrator(canvas, ARCHIPELAGO, **kwargs)


def test_injected_components_are_kept():
    particles = ParticleSystem(rng=random.Random(1))
    body = BodyRenderer(rng=random.Random(2))
    clock = FixedClock(ClockReading(0, 0, 0))
    view = DigitalClockView()

    orchestrator = FrameOrchestrator(
        SilentCanvas(100, 100),
        ARCHIPELAGO,
        particles=particles,
        body=body,
        clock=clock,
        clock_view=view,
    )

    assert orchestrator.particles is particles
    assert orchestrator.body is body
    assert orchestrator.clock is clock
    assert orchestrator.clock_view is view


def test_from_settings_carries_particle_settings():
    settings = Settings(
        seed=5,
        particles={"speed_min": 0.2, "speed_max": 0.2, "size_min": 3.0, "size_max": 3.0, "jitter_mode": "random"},
    )
    orchestrator = FrameOrchestrator.from_settings(settings, 200, 150, clock=FixedClock(ClockReading(1, 2, 3)))

    config = orchestrator.particles.config
    assert (config.speed_min, config.speed_max) == (0.2, 0.2)
    assert config.jitter_mode is JitterMode.RANDOM

    for _ in range(4):
        orchestrator.tick()
    particle = orchestrator.particles.particles[0]
    assert particle.speed == 0.2
    assert particle.size == 3.0


def test_initial_state():
    orchestrator = _orchestrator(SilentCanvas(1000, 1000))
    assert orchestrator.frame == 0
    assert len(orchestrator.path) == 51
    assert len(orchestrator.particles) == 0


def test_spawn_cadence():
    orchestrator = _orchestrator(SilentCanvas(1000, 1000))

    for _ in range(3):
        orchestrator.tick()
    assert len(orchestrator.particles) == 0

    orchestrator.tick()
    assert len(orchestrator.particles) == 1

    for _ in range(4):
        orchestrator.tick()
    assert len(orchestrator.particles) == 2


def test_custom_spawn_interval():
    orchestrator = _orchestrator(SilentCanvas(1000, 1000), spawn_interval=1)
    for _ in range(5):
        orchestrator.tick()
    assert len(orchestrator.particles) == 5


def test_invalid_spawn_interval():
    with pytest.raises(ValueError):
        _orchestrator(SilentCanvas(10, 10), spawn_interval=0)


def test_long_run_population_is_steady():
    seeded = ParticleSystem(rng=random.Random(99), noise=NoiseField(seed=1))
    orchestrator = _orchestrator(SilentCanvas(1000, 1000), particles=seeded)
    assert orchestrator.particles is seeded
    n = len(orchestrator.path)

    for tick in range(1, 401):
        orchestrator.tick()
        particles = orchestrator.particles.particles
        for particle in particles:
            assert particle.index < n - 1
            assert not particle.finished
        if tick >= 200:
            # Lifetimes span ceil(50/0.8)=63 to ceil(50/0.3)=167 frames
            assert 15 <= len(particles) <= 42


def test_tick_returns_clock_reading():
    orchestrator = _orchestrator(SilentCanvas(100, 100))
    reading = orchestrator.tick()
    assert reading == ClockReading(10, 30, 0)
    assert orchestrator.last_reading == reading
    assert orchestrator.frame == 1


def test_resize_regenerates_path():
    orchestrator = _orchestrator(SilentCanvas(1000, 1000))
    for _ in range(10):
        orchestrator.tick()

    orchestrator.resize(500, 200)

    assert orchestrator.canvas.size == (500, 200)
    assert orchestrator.state.width == 500
    assert orchestrator.state.height == 200
    assert orchestrator.frame == 10
    assert len(orchestrator.path) == 51
    assert orchestrator.path[0].x == pytest.approx(ARCHIPELAGO[0].x * 500)
    assert orchestrator.path[0].y == pytest.approx(ARCHIPELAGO[0].y * 200)
    assert orchestrator.path[-1].x == pytest.approx(ARCHIPELAGO[-1].x * 500)
    assert orchestrator.path[-1].y == pytest.approx(ARCHIPELAGO[-1].y * 200)


def test_resize_with_coarser_path_drops_particles_past_the_end():
    orchestrator = _orchestrator(SilentCanvas(1000, 1000), sample_step=0.02)
    orchestrator.particles.spawn(orchestrator.path).index = 40.0
    orchestrator.particles.spawn(orchestrator.path).index = 2.0

    orchestrator.sample_step = 0.1
    orchestrator.resize(800, 800)
    assert len(orchestrator.path) == 11

    orchestrator.tick()
    assert all(p.index < 10 for p in orchestrator.particles.particles)
    assert len(orchestrator.particles) == 1


def test_renders_into_a_real_canvas():
    canvas = Canvas(160, 120)
    orchestrator = _orchestrator(canvas, background=(0, 0, 0), trail_alpha=0.25)
    for _ in range(12):
        orchestrator.tick()
    assert canvas.buffer.any()


def test_from_settings_is_reproducible():
    settings = Settings(seed=5)
    clock = FixedClock(ClockReading(1, 2, 3))

    a = FrameOrchestrator.from_settings(settings, 200, 150, clock=clock)
    b = FrameOrchestrator.from_settings(settings, 200, 150, clock=clock)
    for _ in range(30):
        a.tick()
        b.tick()

    assert a.canvas.size == (200, 150)
    assert [(p.x, p.y) for p in a.particles.particles] == [(p.x, p.y) for p in b.particles.particles]
    assert (a.canvas.buffer == b.canvas.buffer).all()
