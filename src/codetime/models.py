"""Domain models for recorded heartbeats and derived summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from .dates import date_from_unix_millis

UNKNOWN = "Unknown"


@dataclass(slots=True)
class RawHeartbeat:
    """A heartbeat as submitted by an editor plugin, before normalization."""

    entity: str
    time: Optional[int]
    project: str = ""
    language: str = ""
    branch: str = ""
    user_agent: str = ""


@dataclass(frozen=True, slots=True)
class Heartbeat:
    """One stored activity event on a file at a single instant."""

    id: str
    entity: str
    project: str
    language: str
    branch: str
    os: str
    editor: str
    time: int

    @property
    def date(self) -> date:
        """Local calendar date the heartbeat is partitioned under."""
        return date_from_unix_millis(self.time)


def _add_durations(target: dict[str, int], source: dict[str, int]) -> None:
    for key, msec in source.items():
        target[key] = target.get(key, 0) + msec


@dataclass(slots=True)
class DayAggregate:
    """Counted session time and breakdowns for a single day."""

    msec: int = 0
    editors: dict[str, int] = field(default_factory=dict)
    languages: dict[str, int] = field(default_factory=dict)
    oss: dict[str, int] = field(default_factory=dict)
    projects: dict[str, int] = field(default_factory=dict)

    def add_session(self, heartbeat: Heartbeat, msec: int) -> None:
        self.msec += msec
        self.editors[heartbeat.editor] = self.editors.get(heartbeat.editor, 0) + msec
        self.languages[heartbeat.language] = self.languages.get(heartbeat.language, 0) + msec
        self.oss[heartbeat.os] = self.oss.get(heartbeat.os, 0) + msec
        self.projects[heartbeat.project] = self.projects.get(heartbeat.project, 0) + msec


@dataclass(slots=True)
class Summary:
    """Time spent across an inclusive date range."""

    msec_per_day: list[int] = field(default_factory=list)
    total_msec: int = 0
    editors: dict[str, int] = field(default_factory=dict)
    languages: dict[str, int] = field(default_factory=dict)
    oss: dict[str, int] = field(default_factory=dict)
    projects: dict[str, int] = field(default_factory=dict)

    def add_day(self, day: DayAggregate) -> None:
        self.msec_per_day.append(day.msec)
        self.total_msec += day.msec
        _add_durations(self.editors, day.editors)
        _add_durations(self.languages, day.languages)
        _add_durations(self.oss, day.oss)
        _add_durations(self.projects, day.projects)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_msec": self.total_msec,
            "msec_per_day": list(self.msec_per_day),
            "editors": dict(self.editors),
            "languages": dict(self.languages),
            "oss": dict(self.oss),
            "projects": dict(self.projects),
        }
