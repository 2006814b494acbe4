"""
Seed script for the message store.

Generates deterministic pseudo-random (id, value) rows and loads them into the
lookup table through RecordStore.insert_many, one transaction per batch.
"""

from __future__ import annotations

import random
import sys
import time
from typing import Dict, Iterator, List, Optional

import typer

from message_store.config import get_settings
from message_store.infrastructure.db_factory import PoolManager
from message_store.repositories.record_store import RecordStore
from message_store.utils.logging import configure_logging

app = typer.Typer(help="Generate greeting messages and load them into the lookup table.")

_GREETINGS = ["Hello", "Hi", "Hey", "Greetings", "Welcome", "Good day"]
_NAMES = ["world", "there", "friend", "team", "reader", "stranger"]


def _generate_records(rows: int, start_id: int, seed: int) -> List[Dict[str, str]]:
    rng = random.Random(seed)
    return [
        {
            "id": str(start_id + i),
            "value": f"{rng.choice(_GREETINGS)}, {rng.choice(_NAMES)}!",
        }
        for i in range(rows)
    ]


def _batched(records: List[Dict[str, str]], batch_size: int) -> Iterator[List[Dict[str, str]]]:
    for offset in range(0, len(records), batch_size):
        yield records[offset : offset + batch_size]


def _load(store: RecordStore, records: List[Dict[str, str]], table: str, batch_size: int) -> int:
    """Insert records batch by batch; return how many were committed."""
    committed = 0
    for batch in _batched(records, batch_size):
        result = store.insert_many(batch, table)
        if result.get("committed"):
            committed += result.get("rows", 0)
    return committed


@app.command()
def main(
    rows: int = typer.Option(
        100,
        "--rows",
        "-r",
        help="Number of rows to generate.",
    ),
    start_id: int = typer.Option(
        1,
        "--start-id",
        help="First id to assign.",
    ),
    batch_size: int = typer.Option(
        50,
        "--batch-size",
        "-b",
        help="Records per insert_many transaction.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    table: Optional[str] = typer.Option(
        None,
        "--table",
        "-t",
        help="Target table (defaults to the configured lookup table).",
    ),
) -> None:
    """
    Generate messages and load them in batches.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    target = table or settings.lookup_table

    start = time.perf_counter()
    records = _generate_records(rows, start_id=start_id, seed=seed)
    typer.echo(f"Loading {rows:,} rows into {target} (batch={batch_size}, seed={seed})")

    pool = PoolManager(settings)
    try:
        committed = _load(RecordStore(pool, settings), records, target, batch_size)
    finally:
        pool.close()

    duration = time.perf_counter() - start
    typer.echo(f"Committed {committed:,}/{rows:,} rows in {duration:.2f}s.")
    if committed != rows:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
