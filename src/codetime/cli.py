"""Command-line interface for the heartbeat server."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from . import dates
from .config import ServerSettings
from .db import SqliteHeartbeatStore, database_connection, load_settings, save_settings
from .errors import InvalidRangeError
from .paths import resolve_db_path

app = typer.Typer(help="Self-hosted coding time tracker.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _load_settings(db_path: Path) -> ServerSettings:
    with database_connection(db_path) as conn:
        return load_settings(conn, ServerSettings())


def _parse_date_option(value: Optional[str], name: str) -> date:
    try:
        return dates.parse_date(value)
    except ValueError as exc:
        raise typer.BadParameter("expected YYYY-MM-DD", param_hint=name) from exc


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="IP address to bind the server."),
    port: int = typer.Option(8765, "--port", min=1, max=65535, help="TCP port for the API."),
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the heartbeat SQLite database."
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        min=1,
        help="Override the session timeout in seconds for this run.",
    ),
) -> None:
    """Run the HTTP server that receives heartbeats."""
    from .server_runner import is_valid_ip, run_server

    if not is_valid_ip(host):
        raise typer.BadParameter("must be an IP address", param_hint="--host")
    resolved_db = resolve_db_path(db_path)
    settings = _load_settings(resolved_db)
    if timeout is not None:
        settings = settings.with_updates(timeout_seconds=timeout)
    run_server(host=host, port=port, db_path=resolved_db, settings=settings)


@app.command()
def today(
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the heartbeat SQLite database."
    ),
) -> None:
    """Print the time counted so far today."""
    from .reporting import SummaryPrinter
    from .service import HeartbeatService

    resolved_db = resolve_db_path(db_path)
    settings = _load_settings(resolved_db)
    day = dates.today()
    with database_connection(resolved_db) as conn:
        result = HeartbeatService(SqliteHeartbeatStore(conn), settings).summarize(day, day)
    SummaryPrinter(settings.time_format).print_today(day, result.total_msec)


@app.command()
def summary(
    start: Optional[str] = typer.Option(
        None, "--start", help="First date (YYYY-MM-DD). Defaults to today."
    ),
    end: Optional[str] = typer.Option(
        None, "--end", help="Last date (YYYY-MM-DD), inclusive. Defaults to --start."
    ),
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the heartbeat SQLite database."
    ),
) -> None:
    """Print time spent per day, project, language, editor and OS."""
    from .reporting import SummaryPrinter
    from .service import HeartbeatService

    start_day = _parse_date_option(start, "--start")
    end_day = _parse_date_option(end, "--end") if end else start_day
    resolved_db = resolve_db_path(db_path)
    settings = _load_settings(resolved_db)
    with database_connection(resolved_db) as conn:
        try:
            result = HeartbeatService(SqliteHeartbeatStore(conn), settings).summarize(
                start_day, end_day
            )
        except InvalidRangeError as exc:
            raise typer.BadParameter(str(exc), param_hint="--end") from exc
    SummaryPrinter(settings.time_format).print_summary(start_day, end_day, result)


@app.command()
def config(
    timeout: Optional[int] = typer.Option(
        None, "--timeout", min=1, help="Session timeout in seconds."
    ),
    time_format: Optional[str] = typer.Option(
        None, "--time-format", help="Duration format using %HH, %H, %MM and %M."
    ),
    db_path: Optional[Path] = typer.Option(
        None, "--db", path_type=Path, help="Location of the heartbeat SQLite database."
    ),
) -> None:
    """Show or update the persisted settings."""
    resolved_db = resolve_db_path(db_path)
    with database_connection(resolved_db) as conn:
        settings = load_settings(conn, ServerSettings())
        if timeout is not None or time_format:
            settings = settings.with_updates(timeout_seconds=timeout, time_format=time_format)
            save_settings(conn, settings)
    typer.echo(f"timeout_seconds = {settings.timeout_seconds}")
    typer.echo(f"time_format = {settings.time_format}")
