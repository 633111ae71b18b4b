"""
Precisely Documents: Application Configuration
===============================================

What:  Typed settings loaded from environment variables or a `.env` file.
How:   pydantic-settings reads and validates each field once, when `Settings`
       is constructed. The application factory receives a `Settings` object
       explicitly; nothing reads configuration from a module global.
Who:   `precisely.main.create_app`, `precisely.__main__` and Alembic.

Environment variables (case-insensitive):
    DB_DRIVER, DB_USERNAME, DB_PASSWORD, DB_HOST, DB_PORT, DB_NAME
        Parts of the database URL.
    DATABASE_URL
        Full SQLAlchemy URL; replaces the parts above when set.
    BACKEND_HOST, BACKEND_PORT (or PORT)
        Listening address.
    REQUEST_TIMEOUT
        Server keep-alive and graceful shutdown timeout, in seconds.
    LOG_LEVEL
        DEBUG, INFO, WARNING, ERROR or CRITICAL.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings.

    Defaults target a local PostgreSQL instance and are suitable for
    development only.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Async SQLAlchemy dialect+driver, e.g. postgresql+asyncpg, mysql+aiomysql
    db_driver: str = Field(default="postgresql+asyncpg")
    db_username: str = Field(default="precisely")
    db_password: str = Field(default="precisely_secret")
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_name: str = Field(default="precisely")

    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the db_* parts when set",
    )

    # Validates pooled connections with a lightweight ping before use
    db_pool_pre_ping: bool = Field(default=True)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("backend_port", "port"),
    )
    request_timeout: int = Field(default=15, ge=1, le=300)

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def sqlalchemy_url(self) -> str:
        """
        What:  The URL handed to `create_async_engine`.
        How:   DATABASE_URL verbatim when present, otherwise assembled from
               the db_* parts with credentials escaped by SQLAlchemy.
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername=self.db_driver,
            username=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


def get_settings() -> Settings:
    """Builds a fresh `Settings` from the current environment."""
    return Settings()
