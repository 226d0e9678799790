"""Frame capture helpers shared by the window and headless runs."""

from pathlib import Path
import logging

import pygame

from ryutai.core.orchestrator import FrameOrchestrator
from ryutai.graphics.renderer import Canvas

logger = logging.getLogger(__name__)


def canvas_surface(canvas: Canvas) -> pygame.Surface:
    """Wrap the canvas pixels in a pygame surface."""
    return pygame.surfarray.make_surface(canvas.buffer.swapaxes(0, 1))


def save_frame(canvas: Canvas, path: Path | str) -> Path:
    """Save the current canvas as an image (format from the suffix)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(canvas_surface(canvas), str(path))
    logger.info(f"Frame saved: {path}")
    return path


def render_headless(orchestrator: FrameOrchestrator, frames: int, output: Path | str) -> Path:
    """Run frames ticks without a window and save the last one."""
    for _ in range(max(0, frames)):
        orchestrator.tick()
    logger.info(
        f"Rendered {orchestrator.frame} frames headless, "
        f"{len(orchestrator.particles)} particles alive"
    )
    return save_frame(orchestrator.canvas, output)
