"""
SQL text construction for the message store.

Pure helpers only: identifier escaping and statement builders. Nothing in this
package opens a connection.
"""

from message_store.sql.escaping import escape_string
from message_store.sql.statements import (
    InsertStatement,
    build_insert,
    build_lookup,
    ordered_values,
)

__all__ = [
    "InsertStatement",
    "build_insert",
    "build_lookup",
    "escape_string",
    "ordered_values",
]
