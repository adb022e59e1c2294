"""Pydantic V2 schemas for the Character Inventory Manager.

Submodules:
    enums: Built-in categories and description eligibility.
    inventory: InventoryItem, InventoryStore and update results.

Example:
    >>> from inventory_manager.models import InventoryStore, BuiltinCategory
    >>> store = InventoryStore()
    >>> store.categories == BuiltinCategory.names()
    True
"""

from __future__ import annotations

from inventory_manager.models.enums import (
    DESCRIPTION_CATEGORIES,
    BuiltinCategory,
    is_description_eligible,
)
from inventory_manager.models.inventory import (
    DescriptionProvider,
    InventoryItem,
    InventoryStore,
    UpsertResult,
    item_key,
)


__all__ = [
    # Enumerations
    "BuiltinCategory",
    "DESCRIPTION_CATEGORIES",
    "is_description_eligible",
    # Inventory
    "DescriptionProvider",
    "InventoryItem",
    "InventoryStore",
    "UpsertResult",
    "item_key",
]
