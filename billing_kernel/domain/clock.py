"""
Clock -- injectable time source.

Engines never read the wall clock: every time-sensitive engine function
takes ``now`` as a parameter. Services receive a Clock through their
constructor, read it once per request, and pass the value down.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Abstract clock interface. ``now()`` returns a timezone-aware datetime."""

    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemClock(Clock):
    """Production clock; the one place that reads real time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    ``now()`` returns the same value until ``advance()`` or ``set_time()``
    is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self._offset = timedelta(0)

    def now(self) -> datetime:
        return self._fixed_time + self._offset

    def set_time(self, time: datetime) -> None:
        self._fixed_time = time
        self._offset = timedelta(0)

    def advance(self, days: int = 0, seconds: int = 0) -> datetime:
        """Move the clock forward and return the new time."""
        self._offset += timedelta(days=days, seconds=seconds)
        return self.now()
