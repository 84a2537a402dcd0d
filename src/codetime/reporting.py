"""Simple reporting utilities for CLI output."""

from __future__ import annotations

import re
from datetime import date, timedelta

from .dates import format_date
from .models import Summary

_TOKEN_PATTERN = re.compile(r"%HH|%H|%MM|%M")


def format_clock(hours: int, minutes: int, time_format: str) -> str:
    """Render hours and minutes using ``%HH``/``%H``/``%MM``/``%M`` placeholders."""
    if hours < 0 or minutes < 0:
        raise ValueError("hours and minutes must be non-negative")
    replacements = {
        "%HH": f"{hours:02d}",
        "%H": str(hours),
        "%MM": f"{minutes:02d}",
        "%M": str(minutes),
    }
    return _TOKEN_PATTERN.sub(lambda match: replacements[match.group(0)], time_format)


def format_msec(msec: int, time_format: str) -> str:
    total_minutes = msec // 60_000
    hours, minutes = divmod(total_minutes, 60)
    return format_clock(hours, minutes, time_format)


def top_entries(durations: dict[str, int], limit: int = 5) -> list[tuple[str, int]]:
    return sorted(durations.items(), key=lambda item: item[1], reverse=True)[:limit]


class SummaryPrinter:
    """Render human-readable summaries in the console."""

    def __init__(self, time_format: str) -> None:
        self.time_format = time_format

    def print_today(self, day: date, msec: int) -> None:
        print(f"Today ({format_date(day)}): {format_msec(msec, self.time_format)}")

    def print_summary(self, start: date, end: date, summary: Summary) -> None:
        print(f"Summary for {format_date(start)} .. {format_date(end)}")
        print("-" * 40)
        print(f"Total: {format_msec(summary.total_msec, self.time_format)}")
        if summary.total_msec == 0:
            print("No coding activity recorded for the selected range.")
            return

        print()
        print("Per day:")
        for offset, msec in enumerate(summary.msec_per_day):
            day = start + timedelta(days=offset)
            print(f"  {format_date(day)}  {format_msec(msec, self.time_format)}")

        for title, durations in (
            ("Projects", summary.projects),
            ("Languages", summary.languages),
            ("Editors", summary.editors),
            ("Operating systems", summary.oss),
        ):
            print()
            print(f"{title}:")
            for name, msec in top_entries(durations):
                print(f"  {name[:30]:<30} {format_msec(msec, self.time_format)}")
