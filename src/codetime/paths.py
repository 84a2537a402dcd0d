"""Locations of the heartbeat database."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from platformdirs import user_data_path

APP_NAME = "codetime"
DB_FILENAME = "heartbeats.sqlite3"


def get_db_path() -> Path:
    """Default database inside the per-user data directory."""
    return user_data_path(appname=APP_NAME, appauthor=False, ensure_exists=True) / DB_FILENAME


def resolve_db_path(db_path: Optional[Path]) -> Path:
    """Use ``db_path`` when given (creating its parent), else the default."""
    if db_path is None:
        return get_db_path()
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
