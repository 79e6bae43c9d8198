"""
Configuration module for MediTrack.
Uses Pydantic BaseSettings so the storage backend and its location come from
the environment (or a .env file) instead of process-wide constants.
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with validation.
    Every field has a default, so a bare environment yields a working SQLite setup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage Configuration
    meditrack_storage_backend: Literal["sqlite", "file"] = Field(
        default="sqlite",
        description="Persistence backend: 'sqlite' or 'file'"
    )
    meditrack_data_dir: str = Field(default="data", description="Directory holding the roster store")
    meditrack_data_file: str = Field(default="meditrack_data.txt", description="Flat-file roster filename")
    meditrack_db_file: str = Field(default="meditrack.db", description="SQLite database filename")
    meditrack_db_busy_timeout: int = Field(default=5000, ge=0, description="SQLite busy timeout in milliseconds")

    # Logging Configuration
    meditrack_log_level: str = Field(default="INFO", description="Root log level")
    meditrack_log_format: Literal["text", "json"] = Field(default="text", description="Log output format")

    @field_validator("meditrack_storage_backend", "meditrack_log_format", mode="before")
    @classmethod
    def _lowercase(cls, value):
        return value.lower() if isinstance(value, str) else value

    @field_validator("meditrack_log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: '{value}'")
        return level

    @property
    def data_file_path(self) -> str:
        """Get the full flat-file path."""
        return str(Path(self.meditrack_data_dir) / self.meditrack_data_file)

    @property
    def database_path(self) -> str:
        """Get the full database path."""
        return str(Path(self.meditrack_data_dir) / self.meditrack_db_file)

    @property
    def use_json_logs(self) -> bool:
        return self.meditrack_log_format == "json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance (tests call get_settings.cache_clear())."""
    return Settings()
