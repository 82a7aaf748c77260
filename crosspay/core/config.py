"""
Application configuration and settings management.

This module loads configuration from environment variables and provides
the settings object that is injected into the services at request time.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from .constants import (
    DEFAULT_APP_PORT,
    DEFAULT_EXPIRES_IN_HOURS,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_SUPPORTED_CHAIN_IDS,
    MAX_EXPIRES_IN_HOURS,
    MAX_PAGE_LIMIT,
    MIN_EXPIRES_IN_HOURS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "CrossPay"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = Field(default="development", description="deployment environment")

    # API Server
    host: str = "0.0.0.0"
    port: int = DEFAULT_APP_PORT
    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from string or list.

        Args:
            v: CORS origins as string (comma-separated) or list

        Returns:
            list[str]: List of CORS origin URLs
        """
        if isinstance(v, str):
            if not v.strip():
                return ["*"]
            return [origin.strip() for origin in v.split(",")]
        return v

    # Payment links
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Base URL of the web client that renders shareable payment links"
    )
    supported_chain_ids: Annotated[list[int], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_CHAIN_IDS),
        description="Chain ids accepted as source or destination of a payment link"
    )
    default_expires_in_hours: int = DEFAULT_EXPIRES_IN_HOURS
    min_expires_in_hours: int = MIN_EXPIRES_IN_HOURS
    max_expires_in_hours: int = MAX_EXPIRES_IN_HOURS

    @field_validator("supported_chain_ids", mode="before")
    @classmethod
    def parse_supported_chain_ids(cls, v: str | list[int]) -> list[int]:
        """Parse supported chain ids from a comma-separated string or list."""
        if isinstance(v, str):
            if not v.strip():
                return list(DEFAULT_SUPPORTED_CHAIN_IDS)
            return [int(chain_id.strip()) for chain_id in v.split(",")]
        return v

    # Pagination
    default_page_limit: int = DEFAULT_PAGE_LIMIT
    max_page_limit: int = MAX_PAGE_LIMIT

    # Database Configuration
    # Hosted Postgres (production)
    postgres_url: str | None = Field(default=None, description="Hosted Postgres connection URL")
    # Local development uses a SQLite file by default
    database_url: str = Field(
        default="sqlite:///./crosspay.db",
        description="Database connection URL (PostgreSQL or SQLite)"
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def effective_database_url(self) -> str:
        """Get the async driver URL for the configured database."""
        db_url = self.postgres_url or self.database_url
        if db_url.startswith("postgresql://"):
            return db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if db_url.startswith("postgres://"):
            return db_url.replace("postgres://", "postgresql+asyncpg://", 1)
        if db_url.startswith("sqlite://"):
            return db_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return db_url

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    def payment_url(self, payment_id: str) -> str:
        """Build the shareable link for a payment."""
        return f"{self.frontend_url.rstrip('/')}/payment/{payment_id}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
