from __future__ import annotations

from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from message_store.domain.models import LookupResult, LookupStatus, WriteResult

_STATUS_STYLES = {
    LookupStatus.FOUND: "bold green",
    LookupStatus.NOT_FOUND: "yellow",
    LookupStatus.FAILED: "bold red",
}


def print_lookup(
    record_id: int, result: LookupResult, console: Optional[Console] = None
) -> None:
    """
    Render a lookup outcome as a one-row table.
    """
    console = console or Console()
    table = Table(title="Lookup", box=box.ROUNDED)
    table.add_column("Id", justify="right", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Value / Reason", style="magenta")

    detail = result.value if result.is_found else (result.reason or "")
    style = _STATUS_STYLES[result.status]
    table.add_row(
        str(record_id), f"[{style}]{result.status.value}[/{style}]", escape(detail or "")
    )
    console.print(table)


def print_write(result: WriteResult, console: Optional[Console] = None) -> None:
    """
    Render an insert outcome.

    Failed writes show the error type and message in red.
    """
    console = console or Console()
    table = Table(title="Insert", box=box.ROUNDED)
    table.add_column("Table", style="cyan", no_wrap=True)
    table.add_column("Rows", justify="right", style="magenta")
    table.add_column("Committed")
    table.add_column("Error", style="red")

    committed = result.get("committed", False)
    error = result.get("error")
    error_str = escape(f"{result.get('error_type')}: {error}") if error else ""
    table.add_row(
        result.get("table", ""),
        f"{result.get('rows', 0):,}",
        "[green]yes[/green]" if committed else "[yellow]no[/yellow]",
        error_str,
    )
    console.print(table)


def print_pool_stats(stats: Dict[str, Any], console: Optional[Console] = None) -> None:
    """
    Render pool sizing and counters, sorted by name.
    """
    console = console or Console()
    if not stats:
        console.print("[yellow]No pool statistics available.[/yellow]")
        return

    table = Table(title="Connection Pool", box=box.ROUNDED)
    table.add_column("Counter", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="green")
    for key in sorted(stats):
        table.add_row(key, str(stats[key]))
    console.print(table)


__all__ = ["print_lookup", "print_pool_stats", "print_write"]
