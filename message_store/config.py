"""
Configuration settings for the message store.

Uses Pydantic Settings to load environment variables for the database
connection, pool sizing, HTTP front end and logging. The defaults point at a
local development database and can be overridden through the environment or a
`.env` file.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_url: str = Field("postgresql://localhost:5432/hercules", alias="DB_URL")
    db_user: str = Field("dbadmin", alias="DB_USER")
    db_password: str = Field("hercules", alias="DB_PASSWORD")

    # Pool sizing (psycopg_pool has no partitions, see pool_min_size/pool_max_size)
    pool_min_per_partition: int = Field(1, alias="POOL_MIN_PER_PARTITION")
    pool_max_per_partition: int = Field(5, alias="POOL_MAX_PER_PARTITION")
    pool_partitions: int = Field(3, alias="POOL_PARTITIONS")
    pool_timeout_seconds: float = Field(30.0, alias="POOL_TIMEOUT_SECONDS")

    # Data access
    lookup_table: str = Field("temp", alias="LOOKUP_TABLE")

    # HTTP front end
    http_host: str = Field("0.0.0.0", alias="HTTP_HOST")
    http_port: int = Field(8080, alias="HTTP_PORT")
    fallback_message: str = Field("This value is not from db", alias="FALLBACK_MESSAGE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def pool_min_size(self) -> int:
        """Idle connections kept open across all partitions."""
        return self.pool_min_per_partition * self.pool_partitions

    @property
    def pool_max_size(self) -> int:
        """Upper bound on simultaneously leased connections."""
        return self.pool_max_per_partition * self.pool_partitions


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
