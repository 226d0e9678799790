"""
Desktop window using pygame.

The canvas is blitted 1:1 into a resizable window. Every displayed frame
publishes one TICK; size changes publish RESIZE so the orchestrator can
rebuild the path for the new extent.
"""

import pygame
import asyncio
import logging
from typing import Callable
from dataclasses import dataclass

from ..core.events import EventBus, EventType, Event, tick_event, resize_event
from ..graphics.renderer import Canvas
from .capture import canvas_surface

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    width: int = 1280
    height: int = 720
    title: str = "RYUTAI CLOCK"
    fullscreen: bool = False
    fps: int = 60

    # Debug overlay
    font_size: int = 14
    panel_color: tuple[int, int, int, int] = (10, 12, 20, 190)
    text_color: tuple[int, int, int] = (200, 200, 220)


class ClockWindow:
    """
    Resizable window showing the clock canvas.

    Keyboard Mapping:
        D: Toggle debug overlay
        F: Toggle fullscreen
        S: Save screenshot
        Q / ESC: Quit
    """

    def __init__(
        self,
        canvas: Canvas,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
        status: Callable[[], list[str]] | None = None,
    ) -> None:
        self.canvas = canvas
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()
        self._status = status

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._windowed_size = (self.config.width, self.config.height)

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._set_mode(self.config.width, self.config.height)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, self.config.font_size + 6)

        logger.info(f"Window open: {self.config.width}x{self.config.height} @ {self.config.fps} fps")

    def _set_mode(self, width: int, height: int) -> None:
        """(Re)create the display surface for the current fullscreen flag."""
        if self.config.fullscreen:
            info = pygame.display.Info()
            width, height = info.current_w, info.current_h
            flags = pygame.FULLSCREEN | pygame.DOUBLEBUF
        else:
            flags = pygame.RESIZABLE | pygame.DOUBLEBUF

        self._screen = pygame.display.set_mode((width, height), flags)
        self._apply_size(*self._screen.get_size())

    def _apply_size(self, width: int, height: int) -> None:
        self.config.width = width
        self.config.height = height
        self.event_bus.emit(resize_event(width, height))

    def _poll(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE and not self.config.fullscreen:
                self._windowed_size = (event.w, event.h)
                self._screen = pygame.display.get_surface()
                self._apply_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_s:
            # Saved between frames by the SCREENSHOT subscriber
            self.event_bus.queue_event(Event(
                EventType.SCREENSHOT,
                data={"filename": f"screenshot_{self._frame_count}.png"},
                source="keyboard",
            ))
        elif key == pygame.K_f:
            self.config.fullscreen = not self.config.fullscreen
            self._set_mode(*self._windowed_size)
            logger.info(f"Fullscreen {'on' if self.config.fullscreen else 'off'}")

    def _present(self) -> None:
        if self._screen is None:
            return

        self._screen.blit(canvas_surface(self.canvas), (0, 0))
        if self._show_debug:
            self._draw_overlay()
        pygame.display.flip()

    def _draw_overlay(self) -> None:
        """Semi-transparent panel with fps, size and app status lines."""
        if self._font is None:
            return

        fps = self._clock.get_fps() if self._clock else 0.0
        lines = [
            f"FPS: {fps:.1f}",
            f"Frame: {self._frame_count}",
            f"Window: {self.config.width}x{self.config.height}",
        ]
        if self._status:
            lines.extend(self._status())
        lines += ["", "D debug  F fullscreen  S screenshot  Q quit"]

        line_height = self.config.font_size + 4
        panel = pygame.Surface((320, line_height * len(lines) + 16), pygame.SRCALPHA)
        panel.fill(self.config.panel_color)
        self._screen.blit(panel, (10, 10))

        for i, line in enumerate(lines):
            text = self._font.render(line, True, self.config.text_color)
            self._screen.blit(text, (18, 18 + i * line_height))

    async def run(self) -> None:
        """Frame loop: poll input, tick, flush queued events, present, pace."""
        self._init_pygame()
        self._running = True

        try:
            while self._running:
                self._poll()

                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))
                await self.event_bus.process_queue()

                self._present()
                self._clock.tick(self.config.fps)
                self._frame_count += 1

                await asyncio.sleep(0)
        finally:
            self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
            pygame.quit()
            logger.info(f"Window closed after {self._frame_count} frames")

    def stop(self) -> None:
        self._running = False
