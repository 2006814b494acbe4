"""
Database connection factory utilities for the message store.

Provides the PoolManager, which lazily creates and owns one psycopg
ConnectionPool and leases connections from it, and a guarded process-wide
accessor for code that cannot have a manager injected (the HTTP server, the
CLI).

Dedicated connections outside the pool retry transient failures using
tenacity.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, Optional

import psycopg
from psycopg import Connection
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from message_store.config import Settings, get_settings
from message_store.errors import StoreConnectionError
from message_store.utils.logging import get_logger

log = get_logger(__name__)

POOL_NAME = "message-store"


def build_dsn(settings: Optional[Settings] = None) -> str:
    """
    Compose a connection string from the configured URL and credentials.

    The URL carries host, port and database; user and password are supplied
    separately and merged in as keyword parameters.
    """
    settings = settings or get_settings()
    return make_conninfo(settings.db_url, user=settings.db_user, password=settings.db_password)


class PoolManager:
    """
    Owner of a single bounded connection pool.

    The pool is created on first use and reused until `close()`. Creation is
    guarded by a lock, so concurrent first callers all end up with the same
    pool. Every lease goes through `acquire()`, which returns the connection
    to the pool on every exit path.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        pool_factory: Optional[Callable[..., ConnectionPool]] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._pool_factory = pool_factory
        self._pool: Optional[ConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def min_size(self) -> int:
        return self.settings.pool_min_size

    @property
    def max_size(self) -> int:
        return self.settings.pool_max_size

    def get_pool(self) -> ConnectionPool:
        """
        Get or create the connection pool.

        Returns
        -------
        ConnectionPool
            The managed pool instance, sized `min_size`..`max_size`.
        """
        with self._lock:
            if self._pool is None:
                factory = self._pool_factory or ConnectionPool
                self._pool = factory(
                    conninfo=build_dsn(self.settings),
                    min_size=self.min_size,
                    max_size=self.max_size,
                    timeout=self.settings.pool_timeout_seconds,
                    name=POOL_NAME,
                    open=True,
                )
                log.info(
                    "Connection pool created",
                    extra={
                        "pool": POOL_NAME,
                        "min_size": self.min_size,
                        "max_size": self.max_size,
                    },
                )
            return self._pool

    @contextmanager
    def acquire(self, timeout: Optional[float] = None) -> Generator[Connection, None, None]:
        """
        Lease a connection for the duration of one logical operation.

        Parameters
        ----------
        timeout : float | None
            Seconds to wait for a free connection. Defaults to the pool timeout.

        Raises
        ------
        StoreConnectionError
            If the pool cannot be created from the configured URL, or no
            connection could be leased in time.

        Example
        -------
            manager = PoolManager()
            with manager.acquire() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
        """
        try:
            pool = self.get_pool()
            conn = pool.getconn(timeout=timeout)
        except psycopg.Error as exc:
            raise StoreConnectionError(f"Could not lease a connection: {exc}") from exc
        try:
            yield conn
        finally:
            pool.putconn(conn)

    def stats(self) -> Dict[str, Any]:
        """
        Pool counters plus the configured sizing.

        Only the sizing is reported if the pool has not been created yet.
        """
        stats: Dict[str, Any] = {"min_size": self.min_size, "max_size": self.max_size}
        with self._lock:
            if self._pool is not None:
                stats.update(self._pool.get_stats())
        return stats

    def close(self) -> None:
        """
        Close the pool and release its connections.

        A later `get_pool()` creates a fresh pool.
        """
        with self._lock:
            if self._pool is not None:
                try:
                    self._pool.close()
                    log.info("Connection pool closed", extra={"pool": POOL_NAME})
                finally:
                    self._pool = None


_manager: Optional[PoolManager] = None
_manager_lock = threading.Lock()


def get_pool_manager(settings: Optional[Settings] = None) -> PoolManager:
    """
    Return the process-wide PoolManager, creating it on first call.

    Later calls return the same instance and ignore `settings`. The close hook
    is registered with atexit when the manager is created.
    """
    global _manager
    manager = _manager
    if manager is None:
        with _manager_lock:
            if _manager is None:
                _manager = PoolManager(settings)
                atexit.register(_manager.close)
            manager = _manager
    return manager


def reset_pool_manager() -> None:
    """Close and forget the process-wide PoolManager."""
    global _manager
    with _manager_lock:
        if _manager is not None:
            atexit.unregister(_manager.close)
            _manager.close()
            _manager = None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_connection(settings: Optional[Settings] = None) -> Connection:
    """
    Open a dedicated connection outside the pool, with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection
    errors. Used for one-off administrative work such as schema bootstrap.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(build_dsn(settings))


__all__ = [
    "PoolManager",
    "build_dsn",
    "get_connection",
    "get_pool_manager",
    "reset_pool_manager",
]
