# cargo/core/config.py
"""Configuration settings for cargo file storage.

Uses Pydantic BaseSettings for environment variable management. Every setting
can be supplied as a ``CARGO_``-prefixed environment variable or in ``.env``.
"""
import logging
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cargo.exceptions import StorageRootNotConfigured

logger = logging.getLogger(__name__)


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormatEnum(str, Enum):
    simple = "simple"
    json = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CARGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Storage Settings =====
    file_path: Path | None = Field(default=None, description="Root directory for stored files")
    url_subdir: str | None = Field(
        default=None, description="Public URL prefix the storage root is served under"
    )
    staging_dir: Path | None = Field(
        default=None, description="Directory for staged uploads (system temp dir if unset)"
    )

    # ===== Database Settings =====
    table_name: str = Field(default="external_files", description="Table holding file metadata")

    # ===== Naming =====
    key_length: int = Field(default=6, description="Length of the random filename key")

    # ===== Logging =====
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO, description="Logging level")
    log_format: LogFormatEnum = Field(default=LogFormatEnum.simple, description="Log format")

    # ===== Computed Properties =====
    @property
    def has_storage_root(self) -> bool:
        return self.file_path is not None and str(self.file_path) != ""

    @property
    def has_url_prefix(self) -> bool:
        return self.url_subdir is not None

    # ===== Validation Methods =====
    @field_validator("key_length")
    @classmethod
    def validate_key_length(cls, v):
        if v < 1 or v > 64:
            raise ValueError("Key length must be between 1 and 64")
        return v

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Table name cannot be empty")
        return v.strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


settings = Settings()


def get_settings() -> Settings:
    """Return the active settings instance."""
    return settings


def configure(**overrides) -> Settings:
    """Replace the active settings.

    Unspecified values fall back to the environment and the defaults, so
    ``configure(file_path="/var/files", url_subdir="/files")`` is all most
    applications need at startup.

    ``table_name`` is read when ``cargo.models`` is first imported, so it must
    come from ``CARGO_TABLE_NAME`` or ``.env``; overriding it here has no effect
    on the mapped table.
    """
    global settings
    previous_table = settings.table_name
    settings = Settings(**overrides)
    if settings.table_name != previous_table:
        logger.warning(
            f"table_name changed to {settings.table_name!r} after import; "
            f"stored files still use {previous_table!r}"
        )
    return settings


class ConfigValidator:
    @staticmethod
    def validate_required_settings(config: Settings | None = None):
        config = config or get_settings()
        if not config.has_storage_root:
            raise StorageRootNotConfigured()

    @staticmethod
    def get_feature_status(config: Settings | None = None) -> dict:
        config = config or get_settings()
        return {
            "storage_root": config.has_storage_root,
            "public_urls": config.has_url_prefix,
            "custom_staging_dir": config.staging_dir is not None,
        }


def get_config_summary(config: Settings | None = None) -> dict:
    config = config or get_settings()
    return {
        "file_path": str(config.file_path) if config.file_path is not None else None,
        "url_subdir": config.url_subdir,
        "table_name": config.table_name,
        "key_length": config.key_length,
        "log_level": config.log_level.value,
        "features": ConfigValidator.get_feature_status(config),
    }


__all__ = [
    "settings",
    "Settings",
    "get_settings",
    "configure",
    "ConfigValidator",
    "get_config_summary",
    "LogLevelEnum",
    "LogFormatEnum",
]
