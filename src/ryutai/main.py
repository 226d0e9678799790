"""
Main entry point for RYUTAI CLOCK.

Opens the desktop window by default; --headless renders a fixed number
of frames and saves the last one as an image.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from ryutai.core.clock import ClockReading, FixedClock, SystemClock
from ryutai.core.events import Event, EventBus, EventType
from ryutai.core.orchestrator import FrameOrchestrator
from ryutai.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


class RyutaiApp:
    """Window application wiring the event bus to the frame orchestrator."""

    def __init__(self, settings: Settings):
        from ryutai.simulator.window import ClockWindow, WindowConfig

        self.settings = settings
        self.event_bus = EventBus()
        self.orchestrator = FrameOrchestrator.from_settings(settings, clock=SystemClock())

        display = settings.display
        self.window = ClockWindow(
            canvas=self.orchestrator.canvas,
            config=WindowConfig(
                width=display.width,
                height=display.height,
                title=display.title,
                fullscreen=display.fullscreen,
                fps=display.fps,
            ),
            event_bus=self.event_bus,
            status=self._status_lines,
        )

        self.event_bus.subscribe(EventType.TICK, self._on_tick)
        self.event_bus.subscribe(EventType.RESIZE, self._on_resize)
        self.event_bus.subscribe(EventType.SCREENSHOT, self._on_screenshot)
        self.event_bus.subscribe(EventType.SHUTDOWN, self._on_shutdown)

        logger.info("RyutaiApp initialized")

    def _on_tick(self, event: Event) -> None:
        self.orchestrator.tick()

    def _on_resize(self, event: Event) -> None:
        width, height = event.data["width"], event.data["height"]
        if (width, height) != self.orchestrator.canvas.size:
            self.orchestrator.resize(width, height)

    def _on_screenshot(self, event: Event) -> None:
        from ryutai.simulator.capture import save_frame

        save_frame(self.orchestrator.canvas, event.data.get("filename", "screenshot.png"))

    def _on_shutdown(self, event: Event) -> None:
        logger.info(f"Shutting down after {self.orchestrator.frame} frames")

    def _status_lines(self) -> list[str]:
        reading = self.orchestrator.last_reading
        return [
            f"Particles: {len(self.orchestrator.particles)}",
            f"Path samples: {len(self.orchestrator.path)}",
            f"Time: {reading.hour:02d}:{reading.minute:02d}:{reading.second:02d}" if reading else "Time: --",
        ]

    async def run(self) -> None:
        await self.window.run()


def parse_size(text: str) -> tuple[int, int]:
    """Parse "WIDTHxHEIGHT"."""
    try:
        width, height = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {text!r}") from None
    if width < 1 or height < 1:
        raise argparse.ArgumentTypeError(f"Size must be positive, got {text!r}")
    return width, height


def parse_time(text: str) -> ClockReading:
    try:
        return ClockReading.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RYUTAI CLOCK - time flowing through the dragon archipelago")
    parser.add_argument("--headless", action="store_true", help="Render without a window and save the last frame")
    parser.add_argument("--frames", type=int, default=400, help="Frames to render in headless mode")
    parser.add_argument("--output", type=Path, default=Path("ryutai.png"), help="Headless output image")
    parser.add_argument("--size", type=parse_size, help="Canvas size, e.g. 1000x1000")
    parser.add_argument("--time", type=parse_time, help="Fixed HH:MM[:SS] instead of the system clock")
    parser.add_argument("--seed", type=int, help="Seed for noise and particles")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def run_headless(settings: Settings, args: argparse.Namespace) -> Path:
    from ryutai.simulator.capture import render_headless

    width, height = args.size or (settings.display.width, settings.display.height)
    clock = FixedClock(args.time) if args.time else SystemClock()
    orchestrator = FrameOrchestrator.from_settings(settings, width, height, clock=clock)
    return render_headless(orchestrator, args.frames, args.output)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = get_settings()

    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.debug:
        updates["debug"] = True
    if args.size and not args.headless:
        updates["display"] = settings.display.model_copy(update={"width": args.size[0], "height": args.size[1]})
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(settings.debug)
    logger.info("RYUTAI CLOCK starting...")

    try:
        if args.headless:
            run_headless(settings, args)
        else:
            app = RyutaiApp(settings)
            if args.time:
                app.orchestrator.clock = FixedClock(args.time)
            asyncio.run(app.run())

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("RYUTAI CLOCK stopped")


if __name__ == "__main__":
    main()
