"""The directory holding every character's inventory file.

One file per character, named ``<CharacterName><extension>``. The directory
is checked (and created if missing) once, before any load or save.
"""

from __future__ import annotations

import os
from pathlib import Path

from inventory_manager.core.config import StorageSettings
from inventory_manager.core.constants import INVALID_NAME_CHARACTERS
from inventory_manager.core.exceptions import (
    InvalidCharacterNameError,
    InventoryDirectoryError,
)
from inventory_manager.core.logging import get_logger

logger = get_logger(__name__)


class InventoryDirectory:
    """Character inventory files in one directory.

    Attributes:
        path: The inventory directory.
        extension: File extension of inventory files, including the dot.
    """

    def __init__(self, path: str | Path, *, extension: str = ".txt") -> None:
        self.path = Path(path).expanduser()
        self.extension = extension.lower()

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> InventoryDirectory:
        """Build from storage settings."""
        return cls(settings.inventory_dir, extension=settings.file_extension)

    def ensure(self) -> Path:
        """Create the directory if needed and check it is usable.

        Returns:
            The directory path.

        Raises:
            InventoryDirectoryError: If it cannot be created, is not a
                directory, or lacks read/write permission.
        """
        if not self.path.exists():
            logger.info("Inventory directory not found, creating it", path=str(self.path))
            try:
                self.path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise InventoryDirectoryError(
                    "Failed to create inventory directory",
                    path=str(self.path),
                    details={"reason": str(exc)},
                ) from exc
        elif not self.path.is_dir():
            raise InventoryDirectoryError(
                "The inventory path exists but is not a directory",
                path=str(self.path),
            )

        if not os.access(self.path, os.R_OK | os.W_OK):
            raise InventoryDirectoryError(
                "Insufficient permissions (read/write) for inventory directory",
                path=str(self.path),
            )
        return self.path

    def list_characters(self) -> list[str]:
        """Names of characters with an inventory file, sorted case-insensitively."""
        if not self.path.is_dir():
            return []
        names = [
            entry.name[: -len(self.extension)]
            for entry in self.path.iterdir()
            if entry.is_file() and entry.name.lower().endswith(self.extension)
        ]
        return sorted(names, key=lambda name: (name.casefold(), name))

    def path_for(self, character_name: str) -> Path:
        return self.path / f"{character_name}{self.extension}"

    def validate_new_name(self, character_name: str) -> str:
        """Check that a new character name can become a file name.

        Args:
            character_name: Proposed name.

        Returns:
            The name, stripped of surrounding whitespace.

        Raises:
            InvalidCharacterNameError: If the name is empty, contains one of
                ``<>:"/\\|?*``, or matches an existing character ignoring case.
        """
        name = character_name.strip()
        if not name:
            raise InvalidCharacterNameError("Character name cannot be empty", name=character_name)
        if any(char in INVALID_NAME_CHARACTERS for char in name):
            raise InvalidCharacterNameError(
                f"Character name contains invalid characters ( {INVALID_NAME_CHARACTERS} )",
                name=name,
            )
        if name.casefold() in {existing.casefold() for existing in self.list_characters()}:
            raise InvalidCharacterNameError(
                "A character with this name already exists",
                name=name,
            )
        return name


__all__ = ["InventoryDirectory"]
