"""Configuration management for the Character Inventory Manager.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from inventory_manager.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.storage.inventory_dir)

Environment Variables:
    INVENTORY_MANAGER_INVENTORY_DIR: Directory holding one file per character
    INVENTORY_MANAGER_FILE_EXTENSION: Inventory file extension (default .txt)
    INVENTORY_MANAGER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    INVENTORY_MANAGER_LOG_JSON: Emit JSON log lines instead of console output
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from inventory_manager.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for inventory file storage.

    Attributes:
        inventory_dir: Directory where every character inventory file lives.
        file_extension: Extension of inventory files, including the dot.
        encoding: Text encoding used to read and write inventory files.
    """

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    inventory_dir: Path = Field(
        default_factory=lambda: Path.home() / "DnD_Information",
        description="Directory for character inventory files",
    )
    file_extension: str = Field(
        default=".txt",
        min_length=2,
        description="Inventory file extension",
    )
    encoding: str = Field(
        default="utf-8",
        description="Inventory file text encoding",
    )

    @field_validator("file_extension", mode="after")
    @classmethod
    def validate_extension(cls, value: str) -> str:
        """Ensure the extension starts with a dot and has no separators.

        Args:
            value: The configured extension.

        Returns:
            The validated extension, lower-cased.

        Raises:
            ConfigurationError: If the extension is malformed.
        """
        if not value.startswith(".") or "/" in value or "\\" in value:
            raise ConfigurationError(
                f"file_extension must look like '.txt', got {value!r}",
                config_key="file_extension",
            )
        return value.lower()


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Render logs as JSON lines.
        storage: Inventory file storage settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Character Inventory Manager",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode.

        Returns:
            ``DEBUG`` when debug mode is on, else the configured level.
        """
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Primarily useful for testing or when environment variables have
    changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
