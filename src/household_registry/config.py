"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageBackend(str, Enum):
    """Supported durable collaborators for household snapshots."""

    MEMORY = "memory"
    JSON = "json"
    SQLITE = "sqlite"
    REMOTE = "remote"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Override via environment variables (prefixed with HHR_) or .env file.

    Examples:
        HHR_STORAGE_BACKEND=sqlite
        HHR_SQLITE_PATH=/var/lib/registry/households.db
        HHR_REMOTE_URL=https://docs.example.org/api
        HHR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="HHR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Household Registry"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = Field(default=False, description="Enable debug mode")

    # Storage
    storage_backend: StorageBackend = StorageBackend.JSON
    storage_path: Path = Field(
        default=Path("household_registry.json"),
        description="Key-value JSON file used when storage_backend=json",
    )
    storage_key: str = Field(
        default="households",
        min_length=1,
        description="Key under which the household snapshot is stored",
    )
    sqlite_path: Path = Field(
        default=Path("household_registry.db"),
        description="SQLite document database path (when storage_backend=sqlite)",
    )
    remote_url: str | None = Field(
        default=None,
        description="Base URL of the remote document store (when storage_backend=remote)",
    )
    remote_timeout: float = Field(default=10.0, gt=0)
    remote_background_writes: bool = Field(
        default=True,
        description="Send remote snapshot writes from a background worker",
    )
    seed_sample_data: bool = Field(
        default=False,
        description="Start with sample households when no snapshot exists",
    )

    # Export
    export_filename: str = "household_registry.csv"
    export_directory: Path = Field(
        default=Path("."),
        description="Directory where exported CSV downloads are written",
    )

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format: 'json' for production, 'console' for development",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    @field_validator("debug", mode="before")
    @classmethod
    def set_debug_from_environment(cls, v: bool, info) -> bool:
        """Auto-enable debug in development environment."""
        if info.data.get("environment") == Environment.DEVELOPMENT:
            return True
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def set_log_format_from_environment(cls, v: str, info) -> str:
        """Default to JSON logging in production."""
        if v is None:
            env = info.data.get("environment")
            if env == Environment.PRODUCTION:
                return "json"
        return v or "console"

    @field_validator("export_filename", mode="after")
    @classmethod
    def validate_export_filename(cls, v: str) -> str:
        if not v.lower().endswith(".csv") or "/" in v or "\\" in v:
            raise ValueError(
                f"export_filename must be a bare file name ending in .csv, got {v!r}"
            )
        return v

    @model_validator(mode="after")
    def require_remote_url(self) -> "Settings":
        if self.storage_backend == StorageBackend.REMOTE and not self.remote_url:
            raise ValueError("remote_url must be set when storage_backend is remote")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
