"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Catalog backend
    catalog_backend: Literal["sql", "memory"] = "sql"
    catalog_snapshot_path: str | None = None

    # Database
    database_url: str = "postgresql+asyncpg://ecomm:ecomm_dev_password@db:5432/ecomm"

    # Queries
    query_timeout_seconds: float | None = Field(default=10.0, gt=0)
    default_page_size: int = Field(default=20, ge=0)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
