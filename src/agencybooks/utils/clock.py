"""Injectable time sources.

Services never call ``datetime.now()`` directly; they receive a ``Clock`` so
that creation stamps and reporting windows are deterministic under test.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional


class Clock(ABC):
    """Abstract clock interface."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current naive local time."""


class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock pinned to a moment until moved explicitly."""

    def __init__(self, moment: Optional[datetime] = None):
        """Initialize with an optional fixed time.

        Args:
            moment: Time to report; defaults to 2024-01-01 12:00
        """
        self._moment = moment or datetime(2024, 1, 1, 12, 0, 0)

    def now(self) -> datetime:
        return self._moment

    def set_time(self, moment: datetime) -> None:
        """Move the clock to a specific time."""
        self._moment = moment

    def advance(self, **kwargs) -> datetime:
        """Move the clock forward by a timedelta built from kwargs."""
        self._moment = self._moment + timedelta(**kwargs)
        return self._moment
