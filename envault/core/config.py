"""Application configuration with validation."""

import os
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings with validation.

    Every field can be overridden with an ``ENVAULT_``-prefixed environment
    variable, e.g. ``ENVAULT_DATA_DIR=/tmp/envault-data``.
    """

    # Storage location
    # DATA_DIR: root for the app directory; empty = per-user local data dir.
    data_dir: Optional[str] = Field(
        default=None,
        description="Override for the per-user local data directory"
    )
    app_dir_name: str = Field(
        default="envault",
        description="Directory created under the data dir"
    )
    database_filename: str = Field(
        default="envault.db",
        description="SQLite database file name"
    )

    # CORS Configuration (desktop front end served from a local dev server)
    cors_allowed_origins: str = Field(
        default="http://localhost:1420,tauri://localhost",
        description="Allowed CORS origins (comma-separated)"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="text",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    def get_cors_origins(self) -> List[str]:
        """
        Get CORS origins as a list.

        Parses comma-separated string and validates no wildcards.
        """
        origins = [origin.strip() for origin in self.cors_allowed_origins.split(',') if origin.strip()]

        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) not allowed. "
                "Specify explicit origins in ENVAULT_CORS_ALLOWED_ORIGINS"
            )

        return origins

    def get_database_path(self) -> Path:
        """Full path of the SQLite file: ``<data dir>/<app dir>/<db file>``."""
        root = Path(self.data_dir).expanduser() if self.data_dir else local_data_dir()
        return root / self.app_dir_name / self.database_filename

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ('json', 'text'):
            raise ValueError("Invalid log format. Must be 'json' or 'text'")
        return v_lower

    class Config:
        """Pydantic configuration."""
        env_prefix = "ENVAULT_"
        case_sensitive = False


def local_data_dir() -> Path:
    """Per-user local application data directory for the current platform.

    Windows: %LOCALAPPDATA%; macOS: ~/Library/Application Support;
    elsewhere: $XDG_DATA_HOME or ~/.local/share.
    """
    if sys.platform.startswith("win"):
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data)
        return Path.home() / "AppData" / "Local"

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home and Path(xdg_data_home).is_absolute():
        return Path(xdg_data_home)
    return Path.home() / ".local" / "share"


# Global settings instance
settings = Settings()
