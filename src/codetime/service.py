"""Heartbeat ingestion and summary queries."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from . import dates
from .aggregation import summarize_range
from .config import ServerSettings
from .db import HeartbeatStore
from .models import RawHeartbeat, Summary
from .normalization import normalize_heartbeat

logger = logging.getLogger(__name__)


class HeartbeatService:
    """Stores normalized heartbeats and summarizes them per day."""

    def __init__(
        self,
        store: HeartbeatStore,
        settings: ServerSettings,
        *,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._id_factory = id_factory

    def save(self, raw: RawHeartbeat) -> str:
        heartbeat = normalize_heartbeat(raw, id_factory=self._id_factory)
        self._store.insert(heartbeat)
        logger.debug(
            "Saved heartbeat %s: project=%s language=%s editor=%s os=%s",
            heartbeat.id,
            heartbeat.project,
            heartbeat.language,
            heartbeat.editor,
            heartbeat.os,
        )
        return heartbeat.id

    def today(self) -> int:
        """Return the counted milliseconds for the current local date."""
        day = dates.today()
        return self.summarize(day, day).total_msec

    def summarize(self, start: date, end: date) -> Summary:
        logger.debug(
            "summarize, start=%s, end=%s", dates.format_date(start), dates.format_date(end)
        )
        return summarize_range(start, end, self._store.list_by_date, self._settings.timeout_seconds)
