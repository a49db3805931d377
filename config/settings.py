"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

import re
from pathlib import Path
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # WORKSPACE
    # ===================
    work_root: Path = Field(
        default=Path("."),
        description="Directory holding the flat collection of source files"
    )
    mapping_file: str = Field(
        default="mapping.csv",
        min_length=1,
        description="Mapping file name, relative to work_root"
    )

    # ===================
    # FOLDER DERIVATION
    # ===================
    folder_pattern: str = Field(
        default=r"^([A-Za-z]+)\d*\.",
        description="Regex matched against each filename to derive its folder"
    )
    folder_template: str = Field(
        default="folder_{0}",
        min_length=1,
        description="Folder name template, formatted with the pattern groups"
    )

    # ===================
    # DISPATCH
    # ===================
    create_parents: bool = Field(
        default=False,
        description="Create missing parent directories of a destination"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    @field_validator("folder_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid folder pattern: {e}")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def mapping_path(self) -> Path:
        """Absolute location of the mapping file."""
        path = Path(self.mapping_file)
        if path.is_absolute():
            return path
        return self.work_root / path


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()

