"""
Message store - pooled PostgreSQL data access behind a tiny HTTP front end.

A client asks for a value by numeric id and receives it as JSON. The package
provides:

- Identifier escaping and parameterized INSERT construction for arbitrary
  column/value records
- A lazily created, bounded connection pool shared by all callers
- A record store with single-id lookups, single inserts and batch inserts,
  each in its own explicit transaction and all fail-soft
- A service facade and a FastAPI route on top of the store
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from message_store.config import Settings, get_settings
from message_store.domain.models import LookupResult, LookupStatus, Record, WriteResult
from message_store.errors import (
    DataAccessError,
    EngineExecutionError,
    StatementError,
    StoreConnectionError,
)
from message_store.infrastructure.db_factory import (
    PoolManager,
    get_pool_manager,
    reset_pool_manager,
)
from message_store.repositories.record_store import RecordStore
from message_store.service import MessageService, get_message_service
from message_store.sql.escaping import escape_string
from message_store.sql.statements import InsertStatement, build_insert
from message_store.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "LookupResult",
    "LookupStatus",
    "Record",
    "WriteResult",
    # Errors
    "DataAccessError",
    "EngineExecutionError",
    "StatementError",
    "StoreConnectionError",
    # Data access
    "InsertStatement",
    "PoolManager",
    "RecordStore",
    "build_insert",
    "escape_string",
    "get_pool_manager",
    "reset_pool_manager",
    # Service
    "MessageService",
    "get_message_service",
    # Logging
    "configure_logging",
    "get_logger",
]
