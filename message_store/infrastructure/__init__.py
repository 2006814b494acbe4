"""
Infrastructure package for the message store.

Centralizes database connectivity concerns (pool lifecycle, leasing,
dedicated connections). Keep this layer focused on I/O and resource
management, decoupled from statement building and record semantics.
"""

from message_store.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    get_connection,
    get_pool_manager,
    reset_pool_manager,
)

__all__ = [
    "PoolManager",
    "build_dsn",
    "get_connection",
    "get_pool_manager",
    "reset_pool_manager",
]
