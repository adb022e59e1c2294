"""Storage module for character inventory persistence.

Provides:
- The delimited text codec (load/save of one inventory file)
- The inventory directory (one file per character)
"""

from inventory_manager.storage.codec import (
    InventoryCodec,
    LoadReport,
    ParsedRecord,
    ParseWarning,
)
from inventory_manager.storage.directory import InventoryDirectory

__all__ = [
    "InventoryCodec",
    "InventoryDirectory",
    "LoadReport",
    "ParsedRecord",
    "ParseWarning",
]
