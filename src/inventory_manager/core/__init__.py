"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        InventoryManagerError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Invalid input to an inventory operation.
        StorageError: Inventory file and directory failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        character_context: Tag log entries with the active character.
"""

from __future__ import annotations

from inventory_manager.core.config import (
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from inventory_manager.core.exceptions import (
    ConfigurationError,
    InvalidCharacterNameError,
    InventoryDirectoryError,
    InventoryManagerError,
    LoadError,
    QuantityOverflowError,
    SaveError,
    StorageError,
    ValidationError,
)
from inventory_manager.core.logging import (
    character_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "InventoryManagerError",
    # Configuration & validation exceptions
    "ConfigurationError",
    "ValidationError",
    "QuantityOverflowError",
    "InvalidCharacterNameError",
    # Storage exceptions
    "StorageError",
    "LoadError",
    "SaveError",
    "InventoryDirectoryError",
    # Configuration
    "Settings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "character_context",
]
