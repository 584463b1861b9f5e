"""Injectable time source.

Services never call ``datetime.now()`` directly; they receive a Clock so
tests can pin "now" and window boundaries become deterministic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone, tzinfo


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""


class SystemClock(Clock):
    """Wall-clock time.

    With ``tz`` (a ``zoneinfo.ZoneInfo``) the returned datetimes carry the
    zone's DST rules. Without it they carry the machine's current fixed
    UTC offset.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz

    def now(self) -> datetime:
        if self._tz is not None:
            return datetime.now(self._tz)
        return datetime.now(timezone.utc).astimezone()


class FixedClock(Clock):
    """Test clock that returns the same instant until moved."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def set_time(self, time: datetime) -> None:
        self._time = time

    def advance(self, seconds: int = 1) -> None:
        self._time = self._time + timedelta(seconds=seconds)
