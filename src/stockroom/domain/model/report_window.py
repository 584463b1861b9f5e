"""Calendar windows used to bucket sales for reporting.

All boundaries are computed in the timezone of the ``now`` passed in,
so "today" means local midnight for whoever is asking.

When ``now`` carries a ``zoneinfo.ZoneInfo`` the boundaries get the
offset in force at that wall time, so they stay correct across DST
changes. With a fixed-offset tzinfo (``datetime.timezone``) the offset
of ``now`` is reused, and a boundary on the far side of a DST change is
off by the size of the shift.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Monday 00:00 of the ISO week containing ``now``."""
    return start_of_day(now) - timedelta(days=now.weekday())


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


class ReportWindow(Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    def start(self, now: datetime) -> datetime:
        if self is ReportWindow.TODAY:
            return start_of_day(now)
        if self is ReportWindow.WEEK:
            return start_of_week(now)
        return start_of_month(now)
