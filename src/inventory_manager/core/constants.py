"""Application-wide constants for the Character Inventory Manager.

This module defines the inventory file format constants, quantity bounds
and console display values shared by the models, codec and UI layers.
"""

from __future__ import annotations

import re

# =============================================================================
# Inventory File Format
# =============================================================================

FIELD_DELIMITER = ";"
"""Separator between the fields of one inventory record."""

MAX_RECORD_FIELDS = 4
"""Category, item name, quantity and the optional trailing description."""

MIN_RECORD_FIELDS = 3
"""Category, item name and quantity are required on every record."""

COMMENT_PREFIX = "#"
"""Lines starting with this prefix are headers/comments and are skipped."""

FORMAT_DESCRIPTION = "Category;ItemName;Quantity[;Description]"
"""Human-readable record layout written into the file header."""

QUANTITY_PATTERN = re.compile(r"[+-]?[0-9]+")
"""Base-10 signed integer literal accepted for the quantity field."""

# =============================================================================
# Quantity Bounds
# =============================================================================

MAX_QUANTITY = 2**63 - 1
"""Largest quantity an item may hold (signed 64-bit)."""

MIN_QUANTITY = -(2**63)
"""Smallest quantity accepted from a file (signed 64-bit)."""

# =============================================================================
# Character Files
# =============================================================================

INVALID_NAME_CHARACTERS = '<>:"/\\|?*'
"""Characters a character name may not contain (it becomes a file name)."""

# =============================================================================
# Console Display
# =============================================================================

ITEM_NAME_COLUMN_WIDTH = 25
"""Padding width for item names in printed inventory reports."""

SEPARATOR_LINE = "-" * 36
"""Rule printed under menu headers."""


__all__ = [
    "FIELD_DELIMITER",
    "MAX_RECORD_FIELDS",
    "MIN_RECORD_FIELDS",
    "COMMENT_PREFIX",
    "FORMAT_DESCRIPTION",
    "QUANTITY_PATTERN",
    "MAX_QUANTITY",
    "MIN_QUANTITY",
    "INVALID_NAME_CHARACTERS",
    "ITEM_NAME_COLUMN_WIDTH",
    "SEPARATOR_LINE",
]
