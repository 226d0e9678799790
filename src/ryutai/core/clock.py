"""Wall-clock sources queried once per frame."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol


@dataclass(frozen=True)
class ClockReading:
    """Hour (0-23), minute (0-59) and second (0-59)."""
    hour: int
    minute: int
    second: int

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59 and 0 <= self.second <= 59):
            raise ValueError(f"Invalid time {self.hour}:{self.minute}:{self.second}")

    @classmethod
    def parse(cls, text: str) -> "ClockReading":
        """Parse "HH:MM" or "HH:MM:SS"."""
        parts = [int(p) for p in text.strip().split(":")]
        if len(parts) == 2:
            parts.append(0)
        if len(parts) != 3:
            raise ValueError(f"Expected HH:MM[:SS], got {text!r}")
        return cls(*parts)


class ClockSource(Protocol):
    def now(self) -> ClockReading: ...


class SystemClock:
    """Local wall-clock time."""

    def __init__(self, now: Callable[[], datetime] = datetime.now):
        self._now = now

    def now(self) -> ClockReading:
        current = self._now()
        return ClockReading(current.hour, current.minute, current.second)


class FixedClock:
    """Always reports the same time (headless captures and tests)."""

    def __init__(self, reading: ClockReading):
        self.reading = reading

    def now(self) -> ClockReading:
        return self.reading
