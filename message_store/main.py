from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import typer

from message_store.config import get_settings
from message_store.infrastructure.db_factory import (
    get_connection,
    get_pool_manager,
    reset_pool_manager,
)
from message_store.reporter import print_lookup, print_pool_stats, print_write
from message_store.repositories.record_store import RecordStore
from message_store.utils.logging import configure_logging

app = typer.Typer(help="Message store CLI.")


def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _parse_assignments(assignments: List[str]) -> Dict[str, str]:
    """Turn COL=VALUE arguments into an ordered record."""
    record: Dict[str, str] = {}
    for item in assignments:
        column, sep, value = item.partition("=")
        if not sep or not column:
            raise typer.BadParameter(f"Expected COLUMN=VALUE, got '{item}'.")
        if column in record:
            raise typer.BadParameter(f"Column '{column}' given more than once.")
        record[column] = value
    return record


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}:***@{settings.db_url} | "
        f"pool={settings.pool_min_size}..{settings.pool_max_size} "
        f"({settings.pool_partitions} x {settings.pool_min_per_partition}..{settings.pool_max_per_partition}) "
        f"timeout={settings.pool_timeout_seconds}s | "
        f"lookup_table={settings.lookup_table} http={settings.http_host}:{settings.http_port}"
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)."),
) -> None:
    """
    Run the HTTP server.
    """
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "message_store.server:app",
        host=host or settings.http_host,
        port=port or settings.http_port,
        log_config=None,
    )


@app.command()
def lookup(record_id: int = typer.Argument(..., help="Numeric id to look up.")) -> None:
    """
    Look up the value stored for an id.
    """
    _setup()
    try:
        result = RecordStore().lookup(record_id)
        print_lookup(record_id, result)
    finally:
        reset_pool_manager()
    if not result.is_found:
        raise typer.Exit(code=1)


@app.command()
def insert(
    table: str = typer.Argument(..., help="Target table (used verbatim)."),
    assignments: List[str] = typer.Argument(..., help="COLUMN=VALUE pairs, in column order."),
) -> None:
    """
    Insert a single record.
    """
    _setup()
    record = _parse_assignments(assignments)
    try:
        result = RecordStore().insert_one(record, table)
        print_write(result)
    finally:
        reset_pool_manager()
    if not result.get("committed"):
        raise typer.Exit(code=1)


@app.command()
def load(
    table: str = typer.Argument(..., help="Target table (used verbatim)."),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON array of objects."),
) -> None:
    """
    Batch-insert records from a JSON file in one transaction.
    """
    _setup()
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise typer.BadParameter("File must contain a JSON array of objects.")
    records = [{str(k): str(v) for k, v in item.items()} for item in payload]

    try:
        result = RecordStore().insert_many(records, table)
        print_write(result)
    finally:
        reset_pool_manager()
    if records and not result.get("committed"):
        raise typer.Exit(code=1)


@app.command("pool-stats")
def pool_stats(
    warm: bool = typer.Option(False, "--warm", help="Create the pool and wait for min_size connections."),
) -> None:
    """
    Show connection pool sizing and counters.
    """
    _setup()
    manager = get_pool_manager()
    try:
        if warm:
            manager.get_pool().wait(timeout=manager.settings.pool_timeout_seconds)
        print_pool_stats(manager.stats())
    finally:
        reset_pool_manager()


@app.command("init-db")
def init_db(
    sql_file: Path = typer.Option(
        Path("db/init.sql"), "--file", "-f", exists=True, dir_okay=False, help="DDL script to apply."
    ),
) -> None:
    """
    Apply the schema bootstrap script over a dedicated connection.
    """
    _setup()
    ddl = sql_file.read_text(encoding="utf-8")
    with get_connection() as conn:
        conn.execute(ddl)
    typer.echo(f"Applied {sql_file}.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
