"""Core framework components for RYUTAI."""

from .clock import ClockReading, ClockSource, SystemClock, FixedClock
from .events import EventBus, Event, EventType
from .orchestrator import FrameOrchestrator, SimulationState

__all__ = [
    "ClockReading",
    "ClockSource",
    "SystemClock",
    "FixedClock",
    "EventBus",
    "Event",
    "EventType",
    "FrameOrchestrator",
    "SimulationState",
]
