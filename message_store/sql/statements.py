"""
Statement builders for the record store.

Everything here is pure: builders take a table name and column/value data and
return SQL text plus the parameters to bind, without touching a connection.
Placeholders use the psycopg positional paramstyle (`%s`).
"""

from __future__ import annotations

from typing import Mapping, NamedTuple, Sequence, Tuple

from message_store.errors import StatementError
from message_store.sql.escaping import escape_string

PLACEHOLDER = "%s"


class InsertStatement(NamedTuple):
    """SQL text of an INSERT and the values to bind, in placeholder order."""

    sql: str
    values: Tuple[str, ...]


def quote_identifier(column: str) -> str:
    """
    Escape a column name and wrap it in double quotes.

    A literal `%` is doubled so psycopg does not read it as a placeholder.
    """
    return '"' + escape_string(column, True).replace("%", "%%") + '"'


def build_insert(columns_and_values: Mapping[str, str], table_name: str) -> InsertStatement:
    """
    Build a parameterized INSERT for one record.

    The column list and the returned values both follow the mapping's
    iteration order, so positional binding lines up. `table_name` is used
    verbatim.

    Raises
    ------
    StatementError
        If the mapping is empty.
    """
    if not columns_and_values:
        raise StatementError(f"Cannot build an INSERT into {table_name} from an empty record")

    columns = ",".join(quote_identifier(column) for column in columns_and_values)
    placeholders = ",".join(PLACEHOLDER for _ in columns_and_values)
    sql = f"INSERT INTO {table_name} ({columns}) VALUES ({placeholders})"
    return InsertStatement(sql=sql, values=tuple(columns_and_values.values()))


def ordered_values(record: Mapping[str, str], columns: Sequence[str]) -> Tuple[str, ...]:
    """
    Return the record's values for binding against a statement built for `columns`.

    Raises
    ------
    StatementError
        If the record's column sequence differs from `columns` in names or order.
    """
    if tuple(record) != tuple(columns):
        raise StatementError(
            f"Record columns {list(record)} do not match batch columns {list(columns)}"
        )
    return tuple(record.values())


def build_lookup(table_name: str) -> str:
    """SELECT of the `value` column for a single id."""
    return f"SELECT value FROM {table_name} WHERE id = {PLACEHOLDER}"


__all__ = [
    "InsertStatement",
    "PLACEHOLDER",
    "build_insert",
    "build_lookup",
    "ordered_values",
    "quote_identifier",
]
