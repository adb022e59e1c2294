"""Character Inventory Manager.

Per-character item inventories for a tabletop game, each stored as a flat
``Category;ItemName;Quantity[;Description]`` text file.

Example:
    >>> from inventory_manager import InventoryCodec, InventoryStore
    >>> store = InventoryStore()
    >>> result = store.upsert("Weapons", "Dagger", 2, lambda existing: "Balanced for throwing")
    >>> path = InventoryCodec().save("Thorin.txt", store, "Thorin")

Modules:
    core: Configuration, logging, constants, and exceptions.
    models: InventoryStore and InventoryItem (pydantic V2).
    storage: The text codec and the inventory directory.
    ui: rich console prompts and the interactive menu.
"""

from __future__ import annotations

from inventory_manager.core.config import Settings, get_settings
from inventory_manager.core.exceptions import (
    InventoryManagerError,
    LoadError,
    SaveError,
)
from inventory_manager.core.logging import configure_logging, get_logger
from inventory_manager.models import (
    BuiltinCategory,
    InventoryItem,
    InventoryStore,
    UpsertResult,
    is_description_eligible,
)
from inventory_manager.storage import (
    InventoryCodec,
    InventoryDirectory,
    LoadReport,
    ParseWarning,
)


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "InventoryManagerError",
    "LoadError",
    "SaveError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "BuiltinCategory",
    "InventoryItem",
    "InventoryStore",
    "UpsertResult",
    "is_description_eligible",
    # Storage
    "InventoryCodec",
    "InventoryDirectory",
    "LoadReport",
    "ParseWarning",
]
