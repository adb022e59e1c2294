"""Enumeration types for the Character Inventory Manager.

Defines the built-in inventory categories and which of them carry a
free-text item description.
"""

from __future__ import annotations

from enum import StrEnum


class BuiltinCategory(StrEnum):
    """Inventory categories every character starts with.

    Declaration order is the display and save order. Files may introduce
    further categories at load time; those are appended after these.
    """

    WEAPONS = "Weapons"
    IMPORTANT_ITEMS = "Important Items"
    GENERAL_ITEMS = "General Items"
    MONEY = "Money"

    @classmethod
    def names(cls) -> list[str]:
        """Get the category names in their defined order.

        Returns:
            List of built-in category names.
        """
        return [member.value for member in cls]


DESCRIPTION_CATEGORIES: frozenset[str] = frozenset(
    {
        BuiltinCategory.WEAPONS.value,
        BuiltinCategory.IMPORTANT_ITEMS.value,
        BuiltinCategory.GENERAL_ITEMS.value,
    }
)
"""Categories whose items persist and display a description. Money never does."""


def is_description_eligible(category: str) -> bool:
    """Check whether items in ``category`` carry a description.

    Only the three built-in non-Money categories qualify; categories added
    dynamically while loading a file never do.

    Args:
        category: Category name, compared exactly.

    Returns:
        True if descriptions are stored for this category.
    """
    return category in DESCRIPTION_CATEGORIES


__all__ = [
    "BuiltinCategory",
    "DESCRIPTION_CATEGORIES",
    "is_description_eligible",
]
