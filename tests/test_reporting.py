"""Tests for duration formatting and console summaries."""

from __future__ import annotations

from datetime import date

import pytest

from codetime.models import Summary
from codetime.reporting import SummaryPrinter, format_clock, format_msec, top_entries


class TestFormatting:
    @pytest.mark.parametrize(
        ("time_format", "expected"),
        [
            ("%HH:%MM", "03:07"),
            ("%H:%M", "3:7"),
            ("%Hh %MMm", "3h 07m"),
            ("%H hrs %M mins", "3 hrs 7 mins"),
        ],
    )
    def test_format_clock(self, time_format: str, expected: str) -> None:
        assert format_clock(3, 7, time_format) == expected

    def test_format_clock_rejects_negative_values(self) -> None:
        with pytest.raises(ValueError):
            format_clock(-1, 0, "%H")

    def test_format_msec_truncates_to_minutes(self) -> None:
        assert format_msec(3_600_000 + 25 * 60_000 + 59_999, "%HH:%MM") == "01:25"
        assert format_msec(0, "%HH:%MM") == "00:00"

    def test_top_entries_sorted_by_duration(self) -> None:
        durations = {"a": 1, "b": 30, "c": 7}

        assert top_entries(durations, limit=2) == [("b", 30), ("c", 7)]


class TestSummaryPrinter:
    def test_prints_breakdowns(self, capsys) -> None:
        summary = Summary(
            msec_per_day=[0, 5_400_000],
            total_msec=5_400_000,
            editors={"VS Code": 5_400_000},
            languages={"Go": 3_600_000, "Python": 1_800_000},
            oss={"Linux": 5_400_000},
            projects={"codetime": 5_400_000},
        )

        SummaryPrinter("%HH:%MM").print_summary(date(2024, 3, 11), date(2024, 3, 12), summary)

        out = capsys.readouterr().out
        assert "Total: 01:30" in out
        assert "2024-03-11  00:00" in out
        assert "2024-03-12  01:30" in out
        assert "codetime" in out
        assert out.index("Go") < out.index("Python")

    def test_prints_empty_range(self, capsys) -> None:
        SummaryPrinter("%HH:%MM").print_summary(date(2024, 3, 11), date(2024, 3, 11), Summary([0], 0))

        assert "No coding activity" in capsys.readouterr().out
