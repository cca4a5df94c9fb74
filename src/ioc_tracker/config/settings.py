"""
Settings Configuration
======================

Environment variable management using pydantic-settings.
Follows the 12-factor app methodology.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, ge=1, le=65535, description="Server port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )
    cors_origins: list[str] = Field(
        default=["*"], description="Origins allowed to call the API"
    )

    # -------------------------------------------------------------------------
    # Database Configuration
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/dashboard.sqlite",
        description="SQLAlchemy connection string (async driver)",
    )
    db_pool_min: int = Field(default=2, ge=1, description="Minimum connection pool size")
    db_pool_max: int = Field(default=10, ge=1, description="Maximum connection pool size")

    # -------------------------------------------------------------------------
    # Ingestion Configuration
    # -------------------------------------------------------------------------
    batch_chunk_size: int = Field(
        default=500,
        ge=1,
        le=5000,
        description="Maximum rows per INSERT statement during bulk import",
    )
    max_upload_size_mb: int = Field(
        default=50, ge=1, le=500, description="Max upload size in MB"
    )

    # -------------------------------------------------------------------------
    # Query Configuration
    # -------------------------------------------------------------------------
    list_limit: int = Field(
        default=500,
        ge=1,
        description="Maximum entries returned by an unfiltered listing",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def max_upload_size_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.
    """
    return Settings()
