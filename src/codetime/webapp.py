"""FastAPI application that receives heartbeats and serves summaries."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from . import __version__, dates
from .config import ServerSettings
from .db import SqliteHeartbeatStore, database_connection, load_settings, save_settings
from .errors import CodetimeError, InvalidDateError
from .models import RawHeartbeat
from .paths import resolve_db_path
from .service import HeartbeatService

logger = logging.getLogger(__name__)


class HeartbeatPayload(BaseModel):
    entity: str = ""
    time: Optional[StrictInt] = None
    project: str = ""
    language: str = ""
    branch: str = ""
    user_agent: Optional[str] = None

    # Editor plugins send additional fields (type, category, lines, ...).
    model_config = ConfigDict(extra="ignore")


class ConfigUpdate(BaseModel):
    timeout_seconds: Optional[int] = Field(default=None, gt=0)
    time_format: Optional[str] = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    db_path: Optional[Path] = None,
    settings: Optional[ServerSettings] = None,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_db_path = resolve_db_path(db_path)
    with database_connection(resolved_db_path) as conn:
        resolved_settings = settings or load_settings(conn, ServerSettings())

    app = FastAPI(title="codetime", version=__version__)
    app.state.db_path = resolved_db_path
    app.state.settings = resolved_settings

    @app.on_event("startup")
    async def _startup() -> None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        logger.info(
            "Serving heartbeats from %s (timeout %ss)",
            app.state.db_path,
            app.state.settings.timeout_seconds,
        )

    @app.exception_handler(CodetimeError)
    async def _invalid_input(request: Request, exc: CodetimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"msg": str(exc)})

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.warning("%s %s -- %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"msg": str(exc)})

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        return {
            "version": __version__,
            "database_path": str(request.app.state.db_path),
            "timeout_seconds": request.app.state.settings.timeout_seconds,
        }

    @app.post("/api/heartbeats", status_code=201)
    def create_heartbeat(payload: HeartbeatPayload, request: Request) -> Dict[str, Any]:
        user_agent = payload.user_agent
        if user_agent is None:
            user_agent = request.headers.get("user-agent", "")
        raw = RawHeartbeat(
            entity=payload.entity,
            time=payload.time,
            project=payload.project,
            language=payload.language,
            branch=payload.branch,
            user_agent=user_agent,
        )
        with database_connection(request.app.state.db_path) as conn:
            heartbeat_id = _service(request, conn).save(raw)
        return {"id": heartbeat_id}

    @app.get("/api/today")
    def today(request: Request) -> Dict[str, Any]:
        day = dates.today()
        with database_connection(request.app.state.db_path) as conn:
            total = _service(request, conn).summarize(day, day).total_msec
        return {"date": dates.format_date(day), "total_msec": total}

    @app.get("/api/summaries")
    def summaries(
        request: Request,
        start: Optional[str] = Query(
            default=None,
            description="Start date in YYYY-MM-DD format (inclusive). Defaults to today.",
        ),
        end: Optional[str] = Query(
            default=None,
            description="End date in YYYY-MM-DD format (inclusive). Defaults to start.",
        ),
    ) -> Dict[str, Any]:
        start_day = _parse_date(start)
        end_day = _parse_date(end) if end else start_day
        with database_connection(request.app.state.db_path) as conn:
            summary = _service(request, conn).summarize(start_day, end_day)
        return {
            "start": dates.format_date(start_day),
            "end": dates.format_date(end_day),
            **summary.to_dict(),
        }

    @app.get("/api/config")
    def get_config(request: Request) -> Dict[str, Any]:
        return _settings_payload(request.app.state.settings)

    @app.put("/api/config")
    def update_config(payload: ConfigUpdate, request: Request) -> Dict[str, Any]:
        updated = request.app.state.settings.with_updates(**payload.model_dump(exclude_unset=True))
        with database_connection(request.app.state.db_path) as conn:
            save_settings(conn, updated)
        request.app.state.settings = updated
        logger.info("Settings updated: timeout=%ss", updated.timeout_seconds)
        return _settings_payload(updated)

    return app


def _service(request: Request, conn: sqlite3.Connection) -> HeartbeatService:
    return HeartbeatService(SqliteHeartbeatStore(conn), request.app.state.settings)


def _settings_payload(settings: ServerSettings) -> Dict[str, Any]:
    return {
        "timeout_seconds": settings.timeout_seconds,
        "time_format": settings.time_format,
    }


def _parse_date(value: Optional[str]) -> date:
    try:
        return dates.parse_date(value)
    except ValueError as exc:
        raise InvalidDateError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc
