"""Local calendar helpers for epoch millisecond timestamps."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

DATE_FMT = "%Y-%m-%d"

# Days whose local midnight bounds are representable as datetimes in any zone.
FIRST_DAY = date(1, 1, 2)
LAST_DAY = date(9999, 12, 30)

# 9999-12-31T23:59:59.999Z
MAX_UNIX_MILLIS = 253_402_300_799_999


def date_from_unix_millis(msec: int) -> date:
    """Return the local civil date containing the given instant."""
    return datetime.fromtimestamp(msec / 1000).date()


def to_unix_millis(value: datetime) -> int:
    """Convert a datetime (naive values are local time) to epoch milliseconds."""
    return int(round(value.timestamp() * 1000))


def start_of_day_millis(day: date) -> int:
    return to_unix_millis(datetime.combine(day, time.min))


def day_bounds_millis(day: date) -> tuple[int, int]:
    """Return ``[start, end)`` of the local day in epoch milliseconds."""
    return start_of_day_millis(day), start_of_day_millis(day + timedelta(days=1))


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        if current == end:
            break
        current += timedelta(days=1)


def day_count(start: date, end: date) -> int:
    return (end - start).days + 1


def today() -> date:
    return datetime.now().date()


def parse_date(value: Optional[str]) -> date:
    """Parse ``YYYY-MM-DD``; an empty value means today."""
    if not value:
        return today()
    return datetime.strptime(value, DATE_FMT).date()


def format_date(day: date) -> str:
    return day.strftime(DATE_FMT)
