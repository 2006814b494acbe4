"""
Record store: single-id lookups, single inserts and batch inserts.

Every public method leases exactly one pooled connection for its duration and
never raises. Failures are logged with operation context and reported through
the returned LookupResult / WriteResult instead, so the HTTP layer above stays
a thin pass-through.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import psycopg

from message_store.config import Settings, get_settings
from message_store.domain.models import LookupResult, Record, WriteResult
from message_store.errors import DataAccessError, EngineExecutionError
from message_store.infrastructure.db_factory import PoolManager, get_pool_manager
from message_store.sql.statements import build_insert, build_lookup, ordered_values
from message_store.utils.logging import get_logger

log = get_logger(__name__)

# Errors a public method turns into a result value instead of raising.
_SOFT_ERRORS = (DataAccessError, psycopg.Error)

_NO_ROW = object()


class RecordStore:
    """
    Data access over a PoolManager.

    Parameters
    ----------
    pool : PoolManager | None
        Pool to lease connections from. Defaults to the process-wide manager.
    settings : Settings | None
        Source of the lookup table name. Defaults to the cached settings.
    """

    def __init__(
        self,
        pool: Optional[PoolManager] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._pool = pool
        self.lookup_sql = build_lookup(self.settings.lookup_table)

    @property
    def pool(self) -> PoolManager:
        """
        The injected manager, or the current process-wide one.

        The process-wide manager is resolved on every access so a store that
        outlives `reset_pool_manager()` follows its replacement.
        """
        if self._pool is not None:
            return self._pool
        return get_pool_manager(self.settings)

    def lookup(self, record_id: int) -> LookupResult:
        """
        Fetch the value stored for `record_id`.

        When several rows share the id, the last one returned by the engine
        wins; no ordering is imposed. A winning row whose value is SQL NULL
        counts as not found.
        """
        value = _NO_ROW
        try:
            with self.pool.acquire() as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        cur.execute(self.lookup_sql, (record_id,))
                        for (value,) in cur:
                            pass
        except _SOFT_ERRORS as exc:
            log.error(
                f"[LOOKUP FAILED] Exception while getting the value: {exc}",
                extra={"operation": "lookup", "id": record_id, "error_type": type(exc).__name__},
            )
            return LookupResult.failed(str(exc))

        if value is _NO_ROW or value is None:
            log.debug(
                "No value found",
                extra={"operation": "lookup", "id": record_id, "null_value": value is None},
            )
            return LookupResult.not_found()
        return LookupResult.found(value)

    def get_value(self, record_id: int) -> Optional[str]:
        """Value for `record_id`, or None when missing or on failure."""
        return self.lookup(record_id).value_or_none()

    def insert_one(self, record: Record, table_name: str) -> WriteResult:
        """
        Insert one record in its own transaction.

        Columns are bound in the record's iteration order. Empty records are
        rejected before any connection is leased.
        """
        try:
            statement = build_insert(record, table_name)
            log.info(f"Insert query: {statement.sql}", extra={"table": table_name})
            self._write(statement.sql, [statement.values], table_name)
        except _SOFT_ERRORS as exc:
            return self._write_failed("insert_one", table_name, exc)

        log.info("Record successfully inserted.", extra={"table": table_name, "rows": 1})
        return WriteResult(table=table_name, rows=1, committed=True, error=None, error_type=None)

    def insert_many(self, records: Optional[Iterable[Record]], table_name: str) -> WriteResult:
        """
        Insert a batch of records in one transaction and one round trip.

        The statement is built from the first record; every record must carry
        the same columns in the same order or the whole batch is rejected.
        An empty or missing batch is a no-op.
        """
        batch: Sequence[Record] = list(records) if records is not None else []
        if not batch:
            log.info(
                "insert_many called with no records; nothing to insert",
                extra={"table": table_name},
            )
            return WriteResult(
                table=table_name, rows=0, committed=False, error=None, error_type=None
            )

        try:
            first = batch[0]
            statement = build_insert(first, table_name)
            columns = tuple(first)
            params = [ordered_values(record, columns) for record in batch]
            log.info(f"Insert query: {statement.sql}", extra={"table": table_name})
            self._write(statement.sql, params, table_name, many=True)
        except _SOFT_ERRORS as exc:
            return self._write_failed("insert_many", table_name, exc)

        log.info(
            f"Batch insert successful. Inserted records count: {len(batch)}",
            extra={"table": table_name, "rows": len(batch)},
        )
        return WriteResult(
            table=table_name, rows=len(batch), committed=True, error=None, error_type=None
        )

    def _write(
        self,
        sql: str,
        params: Sequence[Tuple[str, ...]],
        table_name: str,
        many: bool = False,
    ) -> None:
        """
        Execute `sql` once per parameter tuple inside one explicit transaction.

        With `many`, the tuples are sent as one pipelined batch.

        Raises
        ------
        StoreConnectionError
            If no connection could be leased.
        EngineExecutionError
            If execute or commit failed; the transaction has been rolled back.
        """
        with self.pool.acquire() as conn:
            try:
                conn.autocommit = False
                with conn.cursor() as cur:
                    if many:
                        cur.executemany(sql, params)
                    else:
                        cur.execute(sql, params[0])
                conn.commit()
            except psycopg.Error as exc:
                if not conn.closed:
                    conn.rollback()
                raise EngineExecutionError(
                    f"Write into {table_name} failed: {exc}"
                ) from exc

    def _write_failed(self, operation: str, table_name: str, exc: BaseException) -> WriteResult:
        log.error(
            f"[INSERT FAILED] Exception while inserting into {table_name}: {exc}",
            extra={
                "operation": operation,
                "table": table_name,
                "error_type": type(exc).__name__,
            },
        )
        return WriteResult(
            table=table_name,
            rows=0,
            committed=False,
            error=str(exc),
            error_type=type(exc).__name__,
        )


__all__ = ["RecordStore"]
