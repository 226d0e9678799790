import random

import pytest

from ryutai.geometry import ARCHIPELAGO, generate_path
from ryutai.graphics.primitives import BlendMode
from ryutai.graphics.renderer import Canvas


class RecordingCanvas(Canvas):
    """Canvas that records draw calls (and the blend mode at call time)."""

    def __init__(self, width: int = 100, height: int = 100):
        super().__init__(width, height)
        self.ellipses = []
        self.strokes = []

    def fill_ellipse(self, cx, cy, width, height, color, alpha=1.0):
        self.ellipses.append((cx, cy, width, height, color, alpha, self.blend_mode))

    def stroke_polyline(self, points, color, thickness=1.0, alpha=1.0):
        self.strokes.append((list(points), color, thickness, alpha, self.blend_mode))


class SilentCanvas(Canvas):
    """Canvas with the right extent that skips all pixel work."""

    def fade(self, color, alpha):
        pass

    def stroke_polyline(self, points, color, thickness=1.0, alpha=1.0):
        pass

    def fill_ellipse(self, cx, cy, width, height, color, alpha=1.0):
        pass

    def draw_text_centered(self, text, cx, cy, color, scale=1, alpha=1.0):
        return 0, 0


class ExplodingCanvas(Canvas):
    """Canvas whose ellipse drawing fails."""

    def fill_ellipse(self, cx, cy, width, height, color, alpha=1.0):
        raise RuntimeError("draw failed")


@pytest.fixture
def path():
    return generate_path(ARCHIPELAGO, 1000, 1000, 0.02)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def canvas():
    return Canvas(64, 64)


@pytest.fixture
def recording_canvas():
    return RecordingCanvas(1000, 1000)


@pytest.fixture
def normal_mode():
    return BlendMode.NORMAL
