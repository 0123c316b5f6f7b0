"""
recordstore Configuration using Pydantic Settings.

Provides strongly typed configuration with environment variable support,
validation, and sensible defaults.

Environment variables use RECORDSTORE_ prefix:
- RECORDSTORE_STORAGE_BASE_DIR, RECORDSTORE_STORAGE_JSON_INDENT (storage settings)
- RECORDSTORE_LOG_LEVEL, RECORDSTORE_LOG_FORMAT, RECORDSTORE_LOG_FILE (log settings)
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, TypeVar

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.entity import Entity


T = TypeVar("T", bound=Entity)

BASE_DIRECTORY_NAME = "file-database"


def default_base_dir() -> Path:
    """Default store directory: ~/file-database."""
    return Path.home() / BASE_DIRECTORY_NAME


class StorageSettings(BaseSettings):
    """Store file location and format settings."""

    model_config = SettingsConfigDict(
        env_prefix="RECORDSTORE_STORAGE_",
        extra="ignore",
    )

    base_dir: Path = Field(
        default_factory=default_base_dir,
        description="Directory holding one <store_name>.json file per entity type"
    )
    json_indent: Optional[int] = Field(
        default=None,
        ge=0,
        description="Indentation of written JSON (None = compact)"
    )

    @field_validator('base_dir')
    @classmethod
    def expand_base_dir(cls, v: Path) -> Path:
        """Expand ~ in configured paths."""
        return v.expanduser()


class LogSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="RECORDSTORE_LOG_",
        extra="ignore",
    )

    level: str = Field(
        default="WARNING",
        description="Log level"
    )
    format: str = Field(
        default="console",
        description="Log format (json, console)"
    )
    file: Optional[str] = Field(
        default=None,
        description="Log file path"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        v_lower = v.lower()
        if v_lower not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'console'")
        return v_lower


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from:
    1. Environment variables (RECORDSTORE_* prefix)
    2. YAML config file
    3. Default values

    Environment variables take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORDSTORE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    @classmethod
    def load_from_yaml(cls, config_file: Path) -> "Settings":
        """Load settings from YAML file with environment overrides."""
        data = {}

        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

        settings_dict = {}

        # Section constructors read their own env vars, which override the YAML values
        if 'storage' in data:
            settings_dict['storage'] = StorageSettings(**_without_env_overrides(StorageSettings, data['storage']))
        if 'log' in data:
            settings_dict['log'] = LogSettings(**_without_env_overrides(LogSettings, data['log']))

        return cls(**settings_dict)

    def open_store(self, entity_type: type[T]):
        """Construct a RecordStore for an entity type under the configured base directory."""
        from ..repositories.file_repository import RecordStore
        from ..serializer import JsonSerializer

        return RecordStore(
            entity_type,
            self.storage.base_dir,
            serializer=JsonSerializer(entity_type, indent=self.storage.json_indent),
        )


def _without_env_overrides(section: type[BaseSettings], values: dict) -> dict:
    """Drop YAML keys that an environment variable already sets."""
    import os

    prefix = section.model_config.get("env_prefix", "")
    return {
        key: value
        for key, value in values.items()
        if f"{prefix}{key}".upper() not in {name.upper() for name in os.environ}
    }


@lru_cache()
def get_settings(config_file: Optional[Path] = None) -> Settings:
    """
    Get application settings (cached per config file).

    Loads the YAML file when given and present, then applies environment
    variable overrides.
    """
    if config_file is not None and config_file.exists():
        return Settings.load_from_yaml(config_file)

    return Settings()
