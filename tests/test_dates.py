"""Tests for local calendar helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from codetime.dates import (
    date_from_unix_millis,
    day_bounds_millis,
    day_count,
    format_date,
    iter_days,
    parse_date,
    to_unix_millis,
    today,
)

from conftest import at


class TestDates:
    def test_date_from_unix_millis_uses_local_calendar(self) -> None:
        assert date_from_unix_millis(at(date(2024, 3, 12), 0, 0, 0)) == date(2024, 3, 12)
        assert date_from_unix_millis(at(date(2024, 3, 12), 23, 59, 59, 999)) == date(2024, 3, 12)

    def test_day_bounds_cover_exactly_one_day(self) -> None:
        start, end = day_bounds_millis(date(2024, 3, 12))

        assert start == to_unix_millis(datetime(2024, 3, 12))
        assert end == to_unix_millis(datetime(2024, 3, 13))
        assert date_from_unix_millis(start) == date(2024, 3, 12)
        assert date_from_unix_millis(end - 1) == date(2024, 3, 12)
        assert date_from_unix_millis(end) == date(2024, 3, 13)

    def test_iter_days_is_inclusive_and_crosses_years(self) -> None:
        days = list(iter_days(date(2023, 12, 30), date(2024, 1, 2)))

        assert days == [date(2023, 12, 30), date(2023, 12, 31), date(2024, 1, 1), date(2024, 1, 2)]
        assert day_count(date(2023, 12, 30), date(2024, 1, 2)) == 4

    def test_iter_days_handles_leap_years(self) -> None:
        assert len(list(iter_days(date(2024, 2, 1), date(2024, 2, 29)))) == 29
        assert list(iter_days(date(2023, 2, 28), date(2023, 3, 1))) == [
            date(2023, 2, 28),
            date(2023, 3, 1),
        ]

    def test_parse_and_format_date(self) -> None:
        assert parse_date("2024-03-12") == date(2024, 3, 12)
        assert format_date(date(2024, 3, 2)) == "2024-03-02"

    def test_parse_date_defaults_to_today(self) -> None:
        assert parse_date(None) == today()
        assert parse_date("") == today()

    def test_parse_date_rejects_bad_format(self) -> None:
        with pytest.raises(ValueError):
            parse_date("12/03/2024")

    def test_iter_days_stops_at_last_representable_date(self) -> None:
        assert list(iter_days(date.max - timedelta(days=1), date.max)) == [
            date.max - timedelta(days=1),
            date.max,
        ]
