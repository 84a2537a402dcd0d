"""SQLite database layer for heartbeats and persisted settings."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator, Protocol

from .config import ServerSettings
from .dates import day_bounds_millis
from .models import Heartbeat


class HeartbeatStore(Protocol):
    """Storage collaborator the service persists to and reads days from."""

    def insert(self, heartbeat: Heartbeat) -> None: ...

    def list_by_date(self, day: date) -> list[Heartbeat]: ...


def open_database(path: Path, *, check_same_thread: bool = True) -> sqlite3.Connection:
    """Open (and initialize) the SQLite database."""
    conn = sqlite3.connect(
        path,
        isolation_level=None,
        check_same_thread=check_same_thread,
    )
    conn.row_factory = sqlite3.Row
    initialize_schema(conn)
    return conn


@contextmanager
def database_connection(
    path: Path, *, check_same_thread: bool = True
) -> Iterator[sqlite3.Connection]:
    conn = open_database(path, check_same_thread=check_same_thread)
    try:
        yield conn
    finally:
        conn.close()


def initialize_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS heartbeats (
            id TEXT PRIMARY KEY,
            entity TEXT NOT NULL,
            project TEXT NOT NULL,
            language TEXT NOT NULL,
            branch TEXT NOT NULL,
            os TEXT NOT NULL,
            editor TEXT NOT NULL,
            time INTEGER NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_heartbeats_time
            ON heartbeats(time);

        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );
        """
    )


def insert_heartbeat(conn: sqlite3.Connection, heartbeat: Heartbeat) -> None:
    conn.execute(
        """
        INSERT INTO heartbeats (
            id,
            entity,
            project,
            language,
            branch,
            os,
            editor,
            time
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            heartbeat.id,
            heartbeat.entity,
            heartbeat.project,
            heartbeat.language,
            heartbeat.branch,
            heartbeat.os,
            heartbeat.editor,
            heartbeat.time,
        ),
    )


def list_heartbeats_by_date(conn: sqlite3.Connection, day: date) -> list[Heartbeat]:
    """Fetch the heartbeats of one local calendar day, oldest first."""
    start_msec, end_msec = day_bounds_millis(day)
    rows = conn.execute(
        """
        SELECT id, entity, project, language, branch, os, editor, time
        FROM heartbeats
        WHERE time >= ? AND time < ?
        ORDER BY time, rowid;
        """,
        (start_msec, end_msec),
    )
    return [_row_to_heartbeat(row) for row in rows]


def _row_to_heartbeat(row: sqlite3.Row) -> Heartbeat:
    return Heartbeat(
        id=row["id"],
        entity=row["entity"],
        project=row["project"],
        language=row["language"],
        branch=row["branch"],
        os=row["os"],
        editor=row["editor"],
        time=row["time"],
    )


def load_settings(conn: sqlite3.Connection, defaults: ServerSettings) -> ServerSettings:
    """Overlay persisted settings on top of ``defaults``."""
    values = {row["key"]: row["value"] for row in conn.execute("SELECT key, value FROM settings")}
    timeout = values.get("timeout_seconds")
    return defaults.with_updates(
        timeout_seconds=int(timeout) if timeout is not None else None,
        time_format=values.get("time_format"),
    )


def save_settings(conn: sqlite3.Connection, settings: ServerSettings) -> None:
    conn.executemany(
        """
        INSERT INTO settings (key, value) VALUES (?, ?)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """,
        [
            ("timeout_seconds", str(settings.timeout_seconds)),
            ("time_format", settings.time_format),
        ],
    )


class SqliteHeartbeatStore:
    """Adapts an open connection to the :class:`HeartbeatStore` interface."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, heartbeat: Heartbeat) -> None:
        insert_heartbeat(self._conn, heartbeat)

    def list_by_date(self, day: date) -> list[Heartbeat]:
        return list_heartbeats_by_date(self._conn, day)
