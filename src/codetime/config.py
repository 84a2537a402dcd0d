"""Configuration models and helpers for the heartbeat server."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

DEFAULT_TIME_FORMAT = "%HH:%MM"


@dataclass(slots=True)
class ServerSettings:
    """Runtime configuration shared by the service and the HTTP layer."""

    timeout: timedelta = timedelta(minutes=15)
    time_format: str = DEFAULT_TIME_FORMAT

    @property
    def timeout_seconds(self) -> int:
        return int(self.timeout.total_seconds())

    @classmethod
    def from_values(
        cls,
        timeout_seconds: int,
        time_format: Optional[str] = None,
    ) -> "ServerSettings":
        if timeout_seconds <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        return cls(
            timeout=timedelta(seconds=timeout_seconds),
            time_format=time_format or DEFAULT_TIME_FORMAT,
        )

    def with_updates(
        self,
        *,
        timeout_seconds: Optional[int] = None,
        time_format: Optional[str] = None,
    ) -> "ServerSettings":
        """Return a copy with the given fields replaced."""
        return ServerSettings.from_values(
            timeout_seconds if timeout_seconds is not None else self.timeout_seconds,
            time_format if time_format is not None else self.time_format,
        )
