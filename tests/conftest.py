"""
Pytest configuration for the message store.

Provides fixtures for:
- Resetting process-wide state (cached settings, global pool manager)
- Database connection management for integration tests
- Schema bootstrap and table cleanup
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import psycopg
import pytest

from message_store.config import Settings, get_settings
from message_store.infrastructure.db_factory import build_dsn, reset_pool_manager


@pytest.fixture(autouse=True)
def reset_process_state() -> Generator[None, None, None]:
    """
    Give every test fresh settings and no global pool manager.
    """
    get_settings.cache_clear()
    reset_pool_manager()
    yield
    reset_pool_manager()
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_url=os.getenv("DB_URL", "postgresql://localhost:5432/hercules"),
        db_user=os.getenv("DB_USER", "dbadmin"),
        db_password=os.getenv("DB_PASSWORD", "hercules"),
        pool_timeout_seconds=5.0,
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return build_dsn(test_settings)


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the lookup table exists by applying db/init.sql.
    """
    init_sql_path = Path(__file__).parent.parent / "db" / "init.sql"
    db_connection.execute(init_sql_path.read_text(encoding="utf-8"))
    return True


@pytest.fixture(scope="function")
def clean_messages_table(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the lookup table before and after each test function.
    """
    db_connection.execute("TRUNCATE TABLE public.temp;")
    yield
    db_connection.execute("TRUNCATE TABLE public.temp;")
