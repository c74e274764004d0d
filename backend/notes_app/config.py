"""
Notes App Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the entry point and Alembic.
When:  Loaded once at module import time; validated before the app starts.

The database location can be given either as one DATABASE_URL or as the
individual DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME parts, which
is how the Docker compose file and the local .env are written.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Production deployments override the database credentials.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Full async SQLAlchemy URL, e.g. postgresql+asyncpg://user:pw@host:5432/db
    # When set it wins over the individual DB_* parts below.
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy connection URL (overrides DB_* parts)",
    )

    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="notes")
    db_password: str = Field(default="password")
    db_name: str = Field(default="notes_app")

    # Connection pool sizing; ignored for SQLite URLs.
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    # ── Frontend ──────────────────────────────────────────────────────────
    # Comma-separated list, "*" allows any origin.
    cors_origins: str = Field(default="*")

    # Directory holding index.html and assets; mounted at "/" when it exists.
    static_dir: str = Field(default="public")

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
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def sqlalchemy_url(self) -> str:
        """
        The URL handed to create_async_engine().

        DATABASE_URL is used verbatim when present. Otherwise a PostgreSQL
        asyncpg URL is composed from the DB_* parts; URL.create() escapes
        special characters in the password.
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername="postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance; create_app() accepts an explicit Settings for tests.
settings = Settings()
