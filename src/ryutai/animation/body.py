"""The dragon's body: a breathing, swaying stroke along the spine."""

from typing import List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum, auto
import logging
import math
import random

from ryutai.animation.noise import NoiseField
from ryutai.geometry import Path
from ryutai.graphics.color import Color
from ryutai.graphics.renderer import Canvas

logger = logging.getLogger(__name__)


class BlinkState(Enum):
    """Eye states."""
    NORMAL = auto()  # Open, full height
    BLINK = auto()   # Collapsed to a sliver


@dataclass
class BodyConfig:
    """Shape, motion and color constants for the body renderer."""

    # Aura (wide outer glow)
    aura_color: Color = (20, 36, 51)
    aura_alpha: float = 0.10
    aura_width_ratio: float = 0.12

    # Body (inner silhouette)
    body_color: Color = (92, 133, 153)
    body_alpha: float = 0.60
    body_width_ratio: float = 0.03

    # Breathing
    breath_ratio: float = 0.005
    breath_speed: float = 0.03
    breath_phase: float = 0.01

    # Sway
    sway_scale: float = 0.01
    sway_time_scale: float = 0.01
    sway_ratio: float = 0.05

    # Body shake
    shake: float = 5.0
    shake_index_scale: float = 0.1
    shake_time_scale: float = 0.02

    # Nodes
    node_spacing: int = 8
    node_size_min: float = 2.0
    node_size_max: float = 5.0
    node_color: Color = (51, 187, 255)

    # Eye
    eye_enabled: bool = True
    eye_index: int = 2
    eye_lift: float = 10.0
    eye_width: float = 12.0
    eye_size: float = 12.0
    eye_blink_size: float = 1.0
    eye_color: Color = (255, 191, 0)
    eye_glow: bool = True
    eye_glow_scale: float = 2.5
    eye_glow_alpha: float = 0.25
    blink_freq: float = 0.1
    blink_threshold: float = 0.95


def blink_state(frame: int, freq: float = 0.1, threshold: float = 0.95) -> BlinkState:
    """Eye state for a frame: BLINK only while sin(frame*freq) exceeds threshold."""
    return BlinkState.BLINK if math.sin(frame * freq) > threshold else BlinkState.NORMAL


class BodyRenderer:
    """Draws the aura, body, nodes and eye each frame.

    Vertex displacement combines a global breathing oscillation with
    per-point coherent noise, so regions of the body wave independently
    but never flicker.
    """

    def __init__(
        self,
        config: Optional[BodyConfig] = None,
        noise: Optional[NoiseField] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or BodyConfig()
        self.rng = rng or random.Random()
        self.noise = noise or NoiseField(seed=self.rng.randint(0, 65535))

    def breath(self, frame: int, y: float, width: float) -> float:
        """Breathing displacement for a point at height y."""
        cfg = self.config
        return cfg.breath_ratio * width * math.sin(cfg.breath_speed * frame + cfg.breath_phase * y)

    def deform(self, path: Path, frame: int, width: float, height: float) -> List[Tuple[float, float]]:
        """Aura vertices: breathing plus noise sway."""
        cfg = self.config
        vertices = []
        for point in path:
            n = self.noise.sample(point.x * cfg.sway_scale, point.y * cfg.sway_scale, frame * cfg.sway_time_scale)
            wave_x = (n - 0.5) * width * cfg.sway_ratio
            wave_y = (n - 0.5) * height * cfg.sway_ratio
            vertices.append((point.x + wave_x, point.y + wave_y + self.breath(frame, point.y, width)))
        return vertices

    def body_vertices(self, path: Path, frame: int, width: float) -> List[Tuple[float, float]]:
        """Body vertices: breathing plus a small per-index shake."""
        cfg = self.config
        vertices = []
        for i, point in enumerate(path):
            n = self.noise.sample(i * cfg.shake_index_scale, frame * cfg.shake_time_scale)
            shake = -cfg.shake + n * 2 * cfg.shake
            vertices.append((point.x + shake, point.y + shake + self.breath(frame, point.y, width)))
        return vertices

    def eye_height(self, frame: int) -> float:
        cfg = self.config
        state = blink_state(frame, cfg.blink_freq, cfg.blink_threshold)
        return cfg.eye_blink_size if state is BlinkState.BLINK else cfg.eye_size

    def render(self, canvas: Canvas, path: Path, frame: int) -> None:
        """Draw the full body for one frame."""
        if not path:
            return

        cfg = self.config
        width, height = canvas.width, canvas.height

        canvas.stroke_polyline(
            self.deform(path, frame, width, height),
            cfg.aura_color,
            thickness=width * cfg.aura_width_ratio,
            alpha=cfg.aura_alpha,
        )
        canvas.stroke_polyline(
            self.body_vertices(path, frame, width),
            cfg.body_color,
            thickness=width * cfg.body_width_ratio,
            alpha=cfg.body_alpha,
        )

        self.render_nodes(canvas, path)

        if cfg.eye_enabled:
            self.render_eye(canvas, path, frame)

    def render_nodes(self, canvas: Canvas, path: Path) -> None:
        """Small markers every node_spacing-th point (chakra points)."""
        cfg = self.config
        for point in path[::max(1, cfg.node_spacing)]:
            size = self.rng.uniform(cfg.node_size_min, cfg.node_size_max)
            canvas.fill_ellipse(point.x, point.y, size, size, cfg.node_color)

    def render_eye(self, canvas: Canvas, path: Path, frame: int) -> None:
        """Golden eye near the head, blinking now and then."""
        cfg = self.config
        head = path[min(cfg.eye_index, len(path) - 1)]
        cx, cy = head.x, head.y - cfg.eye_lift
        eye_h = self.eye_height(frame)

        if cfg.eye_glow:
            canvas.fill_ellipse(
                cx, cy,
                cfg.eye_width * cfg.eye_glow_scale,
                max(eye_h, 1.0) * cfg.eye_glow_scale,
                cfg.eye_color,
                cfg.eye_glow_alpha,
            )
        canvas.fill_ellipse(cx, cy, cfg.eye_width, eye_h, cfg.eye_color)
