"""
Database configuration settings.

Manages the relational store connection for SQLAlchemy's async engine.
PostgreSQL (asyncpg) in deployed environments, SQLite (aiosqlite) locally.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from legalai.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./legalai.db",
        description="SQLAlchemy async database URL",
    )
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
    auto_create_tables: bool = Field(
        default=True,
        description="Create missing tables on application startup",
    )

    @property
    def async_database_url(self) -> str:
        """
        Normalise the configured URL to an async driver.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        url = self.url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured store is SQLite (no connection pool tuning)."""
        return self.async_database_url.startswith("sqlite")
