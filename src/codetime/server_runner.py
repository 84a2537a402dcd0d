"""Helpers to launch the heartbeat API server."""

from __future__ import annotations

import ipaddress
import logging
from pathlib import Path
from typing import Optional

import uvicorn

from .config import ServerSettings
from .webapp import create_app


def is_valid_ip(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    db_path: Optional[Path] = None,
    settings: Optional[ServerSettings] = None,
    log_level: str = "info",
) -> None:
    """Start the FastAPI heartbeat server."""
    if not is_valid_ip(host):
        raise ValueError(f"host must be an IP address, got {host!r}")
    app = create_app(db_path=db_path, settings=settings)

    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(app, host=host, port=port, log_level=log_level)
