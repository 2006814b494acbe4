"""
Error types raised inside the data-access layer.

The record store catches all of these at its boundary and turns them into
result values, so callers above it (service facade, HTTP layer) never see them.
"""

from __future__ import annotations


class DataAccessError(Exception):
    """Base class for every failure raised by the data-access layer."""


class StoreConnectionError(DataAccessError, ConnectionError):
    """
    A connection could not be leased.

    Raised when the pool is exhausted past its timeout, the engine is
    unreachable, authentication fails, or the pool has been closed.
    """


class StatementError(DataAccessError, ValueError):
    """A statement could not be built from the supplied record(s)."""


class EngineExecutionError(DataAccessError):
    """The engine rejected a statement during execute or commit."""


__all__ = [
    "DataAccessError",
    "EngineExecutionError",
    "StatementError",
    "StoreConnectionError",
]
