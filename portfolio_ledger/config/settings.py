"""Typed runtime settings with dotenv support and startup validation."""

import logging
from datetime import date

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_SPLIT_SOURCES = ("file", "yahoo")


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and reconciliation input locations.

    Environment variable names map directly to field names in uppercase.
    Example: `mergers_file` reads from `MERGERS_FILE`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Root logging level name.
        inputs_dir: Directory holding broker movement CSV files.
        renames_file: JSON file mapping old base symbols to new symbols.
        mergers_file: JSON file listing merger/ticker-conversion events.
        forced_exits_file: CSV file listing forced liquidation events.
        split_source: Split history backend, `file` (splits_file) or `yahoo`.
        splits_file: JSON file listing historical split events.
        splits_start_date: Earliest split date considered, ISO `YYYY-MM-DD`.
        api_max_events: Maximum total input events accepted by one API request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    inputs_dir: str = Field(default="./data_inputs")
    renames_file: str = Field(default="./config/config_renames.json")
    mergers_file: str = Field(default="./config/config_mergers.json")
    forced_exits_file: str = Field(default="./config/forced_exits.csv")
    split_source: str = Field(default="file")
    splits_file: str = Field(default="./config/splits.json")
    splits_start_date: str = Field(default="2020-01-01")
    api_max_events: int = Field(default=50000, ge=1)

    @field_validator("inputs_dir", "renames_file", "mergers_file", "forced_exits_file", "splits_file")
    @classmethod
    def _validate_non_empty_path(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in logging.getLevelNamesMapping():
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value

    @field_validator("split_source")
    @classmethod
    def _validate_split_source(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in CONFIG_SPLIT_SOURCES:
            raise ValueError(f"unsupported split_source={value}")
        return normalized_value

    @field_validator("splits_start_date")
    @classmethod
    def _validate_start_date(cls, value: str) -> str:
        stripped_value = value.strip()
        try:
            date.fromisoformat(stripped_value)
        except ValueError as error:
            raise ValueError("splits_start_date must be an ISO date in YYYY-MM-DD format") from error
        return stripped_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
