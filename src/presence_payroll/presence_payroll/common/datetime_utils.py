from __future__ import annotations

import calendar
from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def month_datetime_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Inclusive datetime range covering the whole month (for punch queries)."""
    start, end = month_bounds(year, month)
    return datetime.combine(start, time.min), datetime.combine(end, time.max)


def month_days(year: int, month: int) -> tuple[date, ...]:
    return tuple(date(year, month, d) for d in range(1, days_in_month(year, month) + 1))


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (floored)."""
    return int((end - start).total_seconds() // 60)
