"""Shared fixtures for codetime tests."""

from __future__ import annotations

from datetime import date, datetime
from itertools import count
from typing import Callable

import pytest

from codetime.dates import to_unix_millis
from codetime.models import Heartbeat

DAY = date(2024, 3, 12)


def at(day: date, hour: int = 9, minute: int = 0, second: int = 0, msec: int = 0) -> int:
    """Epoch milliseconds for a local wall-clock time on ``day``."""
    moment = datetime(day.year, day.month, day.day, hour, minute, second)
    return to_unix_millis(moment) + msec


class MemoryStore:
    """In-memory heartbeat store keyed by local date."""

    def __init__(self) -> None:
        self.heartbeats: list[Heartbeat] = []
        self.lookups: list[date] = []

    def insert(self, heartbeat: Heartbeat) -> None:
        self.heartbeats.append(heartbeat)

    def list_by_date(self, day: date) -> list[Heartbeat]:
        self.lookups.append(day)
        return sorted((h for h in self.heartbeats if h.date == day), key=lambda h: h.time)


@pytest.fixture()
def make_heartbeat() -> Callable[..., Heartbeat]:
    ids = count(1)

    def _make(
        time: int,
        *,
        project: str = "codetime",
        language: str = "Python",
        editor: str = "VS Code",
        os: str = "Linux",
        entity: str = "/src/app.py",
        branch: str = "main",
    ) -> Heartbeat:
        return Heartbeat(
            id=f"hb-{next(ids)}",
            entity=entity,
            project=project,
            language=language,
            branch=branch,
            os=os,
            editor=editor,
            time=time,
        )

    return _make


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()

