"""Console interface for the Character Inventory Manager.

Exports:
    Prompter: Input protocol consumed by the workflow.
    RichPrompter: rich-backed Prompter.
    InventoryConsole: Character selection and the inventory menu loop.
    main: Console entry point.
"""

from inventory_manager.ui.app import main
from inventory_manager.ui.console import InventoryConsole
from inventory_manager.ui.prompts import Prompter, RichPrompter

__all__ = [
    "InventoryConsole",
    "Prompter",
    "RichPrompter",
    "main",
]
