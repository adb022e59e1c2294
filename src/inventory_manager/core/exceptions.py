"""Custom exception hierarchy for the Character Inventory Manager.

All exceptions inherit from InventoryManagerError, enabling unified error
handling at the console boundary while preserving domain-specific context
in the ``details`` mapping.

Per-line parse problems are not exceptions: they are collected as
``ParseWarning`` records by the codec (see ``inventory_manager.storage.codec``).

Example:
    >>> from inventory_manager.core.exceptions import SaveError
    >>> raise SaveError("Inventory NOT saved", path="C:/DnD/Thorin.txt")
"""

from __future__ import annotations

from typing import Any


class InventoryManagerError(Exception):
    """Base exception for all inventory manager errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(InventoryManagerError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(InventoryManagerError):
    """Raised when an inventory operation receives invalid input.

    This includes a missing description for a new item in a
    description-eligible category and negative retained quantities.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class QuantityOverflowError(ValidationError):
    """Raised when a quantity update leaves the signed 64-bit range."""

    def __init__(
        self,
        message: str,
        *,
        quantity: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            field_name="quantity",
            invalid_value=quantity,
            details=details,
        )


class InvalidCharacterNameError(ValidationError):
    """Raised when a new character name cannot be used as a file name."""

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            field_name="character_name",
            invalid_value=name,
            details=details,
        )


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(InventoryManagerError):
    """Base exception for inventory file and directory failures."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with path context.

        Args:
            message: Human-readable error description.
            path: The file or directory involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if path:
            combined_details["path"] = path
        super().__init__(message, details=combined_details)


class LoadError(StorageError):
    """Raised when an inventory file exists but cannot be read.

    The store being loaded has already been reset to its empty state when
    this is raised, so callers can continue with an empty inventory.
    """


class SaveError(StorageError):
    """Raised when an inventory file cannot be written.

    The in-memory store is unchanged and the previous file on disk is left
    as it was.
    """


class InventoryDirectoryError(StorageError):
    """Raised when the inventory directory is missing, unusable, or not writable."""


__all__ = [
    "InventoryManagerError",
    "ConfigurationError",
    "ValidationError",
    "QuantityOverflowError",
    "InvalidCharacterNameError",
    "StorageError",
    "LoadError",
    "SaveError",
    "InventoryDirectoryError",
]
