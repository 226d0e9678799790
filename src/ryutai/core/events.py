"""
Frame and window events for RYUTAI.

The window publishes TICK, RESIZE, SCREENSHOT and SHUTDOWN; the app
subscribes and drives the frame orchestrator from them. Window-side
requests that touch the filesystem (screenshots) are queued and handled
between frames rather than inside the pygame event poll.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
import asyncio
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events exchanged between the window and the app."""
    TICK = auto()        # One displayed frame; data: delta, frame
    RESIZE = auto()      # Drawable size changed; data: width, height
    SCREENSHOT = auto()  # Save the canvas; data: filename
    SHUTDOWN = auto()    # Window loop has ended


@dataclass
class Event:
    """
    A published event.

    Attributes:
        type: EventType member, or a free-form string for ad-hoc events
        data: Payload, keyed as documented on EventType
        source: Publisher name ("window", "keyboard", ...)
        timestamp: Wall-clock creation time
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


SyncHandler = Callable[[Event], None]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Publish/subscribe hub.

    `emit` calls synchronous subscribers right away. `queue_event` defers
    delivery to `process_queue`, which the window awaits once per frame and
    which also runs coroutine subscribers. A failing subscriber is logged
    and never stops delivery to the others.
    """

    def __init__(self) -> None:
        self._subscribers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._pending: asyncio.Queue[Event] = asyncio.Queue()

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Register handler for event_type.

        Returns:
            Callable that removes the registration (safe to call twice)
        """
        self._subscribers[event_type].append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)!s} to {event_type}")

        def unsubscribe() -> None:
            handlers = self._subscribers[event_type]
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver event to synchronous subscribers now; coroutine subscribers are skipped."""
        for handler in self._handlers_for(event):
            if not asyncio.iscoroutinefunction(handler):
                self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Hold event until the next process_queue."""
        self._pending.put_nowait(event)

    @property
    def pending(self) -> int:
        return self._pending.qsize()

    async def process_queue(self) -> None:
        """Deliver every queued event to all of its subscribers."""
        while not self._pending.empty():
            event = self._pending.get_nowait()
            await self._deliver(event)
            self._pending.task_done()

    def _handlers_for(self, event: Event) -> list[Handler]:
        # Copy so handlers may unsubscribe while being called
        return list(self._subscribers.get(event.type, ()))

    def _call(self, handler: SyncHandler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Handler for {event.type} failed: {e}")

    async def _deliver(self, event: Event) -> None:
        coroutines = []
        for handler in self._handlers_for(event):
            if asyncio.iscoroutinefunction(handler):
                coroutines.append(handler(event))
            else:
                self._call(handler, event)

        if coroutines:
            results = await asyncio.gather(*coroutines, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Async handler for {event.type} failed: {result}")


def tick_event(delta: float, frame: int) -> Event:
    """TICK carrying the seconds since the previous frame and the window's frame count."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame}, source="window")


def resize_event(width: int, height: int, source: str = "window") -> Event:
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source=source)
