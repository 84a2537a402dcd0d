"""Session-windowed aggregation of heartbeats into time-spent summaries."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Sequence

from .dates import FIRST_DAY, LAST_DAY, format_date, iter_days
from .errors import InvalidRangeError
from .models import DayAggregate, Heartbeat, Summary

logger = logging.getLogger(__name__)


def aggregate_day(heartbeats: Sequence[Heartbeat], timeout_seconds: int) -> DayAggregate:
    """Sum the gaps between consecutive heartbeats of one day.

    ``heartbeats`` must be ascending by time. A gap counts as active work when
    it is at most ``timeout_seconds``; the counted time is attributed to the
    earlier heartbeat of the pair. Longer gaps are idle and skipped.
    """
    result = DayAggregate()
    timeout_msec = timeout_seconds * 1000
    for current, following in zip(heartbeats, heartbeats[1:]):
        gap = following.time - current.time
        if gap > timeout_msec:
            continue
        result.add_session(current, gap)
    return result


def summarize_range(
    start: date,
    end: date,
    list_by_date: Callable[[date], Sequence[Heartbeat]],
    timeout_seconds: int,
) -> Summary:
    """Fold per-day aggregates for every day from ``start`` to ``end`` inclusive."""
    if start > end:
        raise InvalidRangeError(
            f"start date {format_date(start)} is after end date {format_date(end)}"
        )
    if start < FIRST_DAY or end > LAST_DAY:
        raise InvalidRangeError(
            f"dates must fall between {format_date(FIRST_DAY)} and {format_date(LAST_DAY)}"
        )

    summary = Summary()
    for day in iter_days(start, end):
        heartbeats = list_by_date(day)
        aggregate = aggregate_day(heartbeats, timeout_seconds)
        logger.debug(
            "Aggregated %s: %d heartbeats, %d ms", format_date(day), len(heartbeats), aggregate.msec
        )
        summary.add_day(aggregate)
    return summary
