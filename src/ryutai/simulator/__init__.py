"""Desktop window and headless capture."""

from .window import ClockWindow, WindowConfig
from .capture import canvas_surface, save_frame, render_headless

__all__ = ["ClockWindow", "WindowConfig", "canvas_surface", "save_frame", "render_headless"]
