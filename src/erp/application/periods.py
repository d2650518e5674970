"""Reporting windows.

Every window is inclusive at both ends: it starts at 00:00 of its first
day and ends at the last microsecond of its last day, in the timezone of
the ``now`` it is computed from.  Weeks run Sunday to Saturday.
"""

from __future__ import annotations

import calendar
from datetime import datetime, time, timedelta

from erp.domain.exceptions import ValidationError

PERIODS = ("daily", "weekly", "monthly", "yearly", "all")

Window = tuple[datetime | None, datetime | None]


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def _end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.max, tzinfo=moment.tzinfo)


def period_window(period: str | None, now: datetime) -> Window:
    """Window for a period keyword; ``None``/``"all"`` is unbounded."""
    if period is None or period == "all":
        return None, None
    if period == "daily":
        return _start_of_day(now), _end_of_day(now)
    if period == "weekly":
        days_since_sunday = (now.weekday() + 1) % 7
        sunday = now - timedelta(days=days_since_sunday)
        return _start_of_day(sunday), _end_of_day(sunday + timedelta(days=6))
    if period == "monthly":
        return month_window(now.year, now.month, now.tzinfo)
    if period == "yearly":
        start = now.replace(month=1, day=1)
        end = now.replace(month=12, day=31)
        return _start_of_day(start), _end_of_day(end)
    raise ValidationError(
        f"Unknown period '{period}' (expected one of: {', '.join(PERIODS)})"
    )


def month_window(year: int, month: int, tzinfo=None) -> tuple[datetime, datetime]:
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=tzinfo)
    end = datetime.combine(
        datetime(year, month, last_day).date(), time.max, tzinfo=tzinfo
    )
    return start, end
