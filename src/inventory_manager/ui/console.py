"""Interactive inventory manager.

Drives one session: pick or create a character, then loop over the
Add / Delete / Print / Save / Quit menu. All input goes through a
``Prompter`` and all output through a rich ``Console``, so the whole
workflow can be scripted in tests.

This is where the "remove or keep at 0" decision is made when an update
would leave an item at zero or below; the store only applies it.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from inventory_manager.core.constants import ITEM_NAME_COLUMN_WIDTH, SEPARATOR_LINE
from inventory_manager.core.exceptions import (
    InvalidCharacterNameError,
    InventoryDirectoryError,
    LoadError,
    SaveError,
    ValidationError,
)
from inventory_manager.core.logging import character_context, get_logger
from inventory_manager.models.enums import is_description_eligible
from inventory_manager.models.inventory import InventoryItem, InventoryStore
from inventory_manager.storage.codec import InventoryCodec
from inventory_manager.storage.directory import InventoryDirectory
from inventory_manager.ui.prompts import Prompter

logger = get_logger(__name__)


MENU_CHOICES = ("A", "D", "P", "S", "Q")

PRINT_ALL = 1
PRINT_CATEGORY = 2


class InventoryConsole:
    """One interactive inventory session.

    Attributes:
        prompter: Source of validated user input.
        directory: Where character inventory files live.
        codec: Reads and writes inventory files.
        console: Output console.
        store: Inventory of the active character, once selected.
        character_name: Name of the active character, once selected.
    """

    def __init__(
        self,
        prompter: Prompter,
        directory: InventoryDirectory,
        codec: InventoryCodec | None = None,
        console: Console | None = None,
    ) -> None:
        self.prompter = prompter
        self.directory = directory
        self.codec = codec or InventoryCodec()
        self.console = console or Console()
        self.store: InventoryStore | None = None
        self.character_name: str | None = None

    # -------------------------------------------------------------------------
    # Output helpers
    # -------------------------------------------------------------------------

    def _say(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False)

    def _error(self, text: str) -> None:
        self.console.print(f"[bold red]{escape(text)}[/bold red]", highlight=False)

    def _header(self, title: str) -> None:
        self.console.rule(escape(title))

    @property
    def inventory(self) -> InventoryStore:
        if self.store is None:
            raise RuntimeError("No character inventory selected")
        return self.store

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def run(self) -> int:
        """Run a full session.

        Returns:
            Process exit code: 0 on a normal quit, 1 if the inventory
            directory is unusable.
        """
        try:
            self.directory.ensure()
        except InventoryDirectoryError as exc:
            self._error(f"Error: {exc.message}: {self.directory.path}")
            self._error("Failed to select or create a character inventory. Exiting.")
            return 1

        self.select_or_create_character()
        with character_context(self.character_name):
            self.run_menu()
        return 0

    def select_or_create_character(self) -> InventoryStore:
        """Let the user pick an existing character or create a new one.

        Returns:
            The active character's store, loaded or empty.
        """
        names = self.directory.list_characters()
        self._header("Select Character Inventory")
        self._say("0. Create New Character Inventory")
        if not names:
            self._say("(No existing character inventories found)")
        for index, name in enumerate(names, start=1):
            self._say(f"{index}. {name}")
        self._say(SEPARATOR_LINE)

        choice = self.prompter.ask_int_in_range("Enter selection", 0, len(names))
        if choice == 0:
            self.character_name = self._ask_new_character_name()
            self._say(f"Creating new inventory for {self.character_name}.")
            self.store = InventoryStore()
            return self.store

        self.character_name = names[choice - 1]
        self._say(f"Loading inventory for {self.character_name}...")
        self.store = InventoryStore()
        try:
            report = self.codec.load(self.directory.path_for(self.character_name), self.store)
        except LoadError as exc:
            self._error(f"Error loading inventory: {exc.details.get('reason', exc.message)}")
            self._say("Starting with empty inventory due to loading error.")
            return self.store

        for warning in report.warnings:
            self._say(f"Warning: {warning}")
        for category in report.added_categories:
            self._say(f"Warning: Category '{category}' found in file but not pre-defined. Added it.")
        if report.found:
            self._say(f"Inventory for {self.character_name} loaded successfully.")
        else:
            self._say(f"Inventory file not found. Starting with empty inventory for {self.character_name}.")
        return self.store

    def _ask_new_character_name(self) -> str:
        while True:
            candidate = self.prompter.ask_text("Enter new character name")
            try:
                return self.directory.validate_new_name(candidate)
            except InvalidCharacterNameError as exc:
                self._error(f"Error: {exc.message}. Please try again.")

    def run_menu(self) -> None:
        """Show the menu until the user quits."""
        while True:
            self.display_menu()
            choice = self.prompter.ask_choice("Enter your choice", MENU_CHOICES).upper()
            if choice == "A":
                self.add_item()
            elif choice == "D":
                self.delete_item()
            elif choice == "P":
                self.print_inventory()
            elif choice == "S":
                self.save_inventory()
            elif choice == "Q":
                if self.prompter.confirm(f"Save {self.character_name}'s inventory before quitting?"):
                    self.save_inventory()
                self._say(f"Exiting Inventory Manager for {self.character_name}.")
                return
            self._say()

    def display_menu(self) -> None:
        self._header(f"Inventory Manager: {self.character_name}")
        self._say("A - Add/Update an item")
        self._say("D - Delete an item stack")
        self._say("P - Print inventory (All or by Category)")
        self._say("S - Save inventory to file")
        self._say("Q - Quit the program")
        self._say("\nCurrent Inventory Summary:")
        counts = self.inventory.category_counts()
        if not counts:
            self._say("  Inventory is currently empty.")
        for category, count in counts:
            self._say(f"  Category [{category}]: {count} item types")
        self._say(SEPARATOR_LINE)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def add_item(self) -> None:
        """Add to, subtract from, or describe an item."""
        store = self.inventory
        category = self.prompter.select_category(store.categories)
        item_name = self.prompter.ask_text("Enter the name of the item")
        delta = self.prompter.ask_int("Enter the quantity to add (can be negative to subtract)")

        def describe(existing: InventoryItem | None) -> str | None:
            if existing is None:
                return self.prompter.ask_text(f"Enter description for new item '{item_name}'")
            if self.prompter.confirm(
                f"Update description for '{existing.name}'? (Current: \"{existing.description}\")"
            ):
                return self.prompter.ask_text("Enter new description")
            return None

        try:
            result = store.upsert(category, item_name, delta, describe)
        except ValidationError as exc:
            self._error(f"Error: {exc.message}")
            return

        if not result.requires_confirmation:
            self._say(f"Updated '{result.name}' in {category}. New quantity: {result.new_quantity}")
            if is_description_eligible(category) and result.item is not None:
                self._say(f'  Description: "{result.item.description}"')
            return

        self._say(f"Resulting quantity for '{result.name}' is {result.new_quantity}.")
        if self.prompter.confirm("Remove this item completely?"):
            if store.remove(category, result.name) is not None:
                self._say(f"Item '{result.name}' removed from {category}.")
            else:
                self._say(f"Item '{result.name}' was not in {category}; nothing added.")
            return

        description = None
        if is_description_eligible(category):
            current = result.item.description if result.item else ""
            if self.prompter.confirm(
                f"Quantity is 0. Update description for '{result.name}'? (Current: \"{current}\")"
            ):
                description = self.prompter.ask_text("Enter new description")
        store.set_quantity_and_description(category, result.name, 0, description)
        self._say(f"Item '{result.name}' quantity set to 0 in {category}.")

    def delete_item(self) -> None:
        """Delete a whole item stack after confirmation."""
        store = self.inventory
        if not store.has_any_items():
            self._say("Inventory is empty. Nothing to delete.")
            return

        category = self.prompter.select_category(store.categories)
        items = list(store.list_category_items(category))
        if not items:
            self._say(f"Category '{category}' is empty or does not exist.")
            return

        self._say(f"\nItems in category '{category}':")
        show_description = is_description_eligible(category)
        for index, item in enumerate(items, start=1):
            line = f"  {index}. {item.name} ({item.quantity})"
            if show_description and item.description:
                line += f' - "{item.description}"'
            self._say(line)

        choice = self.prompter.ask_int_in_range(
            "Enter the number of the item stack to delete", 1, len(items)
        )
        target = items[choice - 1]
        if not self.prompter.confirm(
            f"Are you sure you want to delete all '{target.name}' ({target.quantity}) from {category}?"
        ):
            self._say("Deletion cancelled.")
            return

        if store.remove(category, target.name) is not None:
            logger.info("Item removed", category=category, item=target.name)
            self._say(f"Item '{target.name}' removed from {category}.")
        else:
            self._error(f"Item '{target.name}' could not be found for removal.")

    def print_inventory(self) -> None:
        """Print every category, or one category with descriptions."""
        store = self.inventory
        if not store.has_any_items():
            self._say("\nInventory is currently empty.")
            return

        self._say("\nPrint Options:")
        self._say("1. Print All Categories")
        self._say("2. Print Specific Category")
        choice = self.prompter.ask_int_in_range("Enter your print choice", PRINT_ALL, PRINT_CATEGORY)

        self._say(f"\n--- INVENTORY REPORT for {self.character_name} ---")
        if choice == PRINT_ALL:
            # descriptions are only shown when printing a single category
            for category, _count in store.category_counts():
                self._say(f"\nCategory: {category}")
                self._say("-" * 20)
                for item in store.list_category_items(category):
                    self._say(f"  - {item.name:<{ITEM_NAME_COLUMN_WIDTH}} : {item.quantity}")
        else:
            category = self.prompter.select_category(store.categories)
            self._say(f"\nCategory: {category}")
            self._say("-" * 20)
            items = list(store.list_category_items(category))
            if not items:
                self._say("  No items in this category.")
            show_description = is_description_eligible(category)
            for item in items:
                if show_description and item.description:
                    self._say(
                        f"  - {item.name:<{ITEM_NAME_COLUMN_WIDTH}} ({item.quantity}): {item.description}"
                    )
                else:
                    self._say(f"  - {item.name:<{ITEM_NAME_COLUMN_WIDTH}} : {item.quantity}")
        self._say("--- END OF REPORT ---")

    def save_inventory(self) -> bool:
        """Save the active inventory.

        Returns:
            True if the file was written.
        """
        if self.character_name is None:
            self._error("Error: No character inventory selected for saving.")
            return False
        try:
            self.codec.save(
                self.directory.path_for(self.character_name),
                self.inventory,
                self.character_name,
            )
        except SaveError as exc:
            self._error(f"Error saving inventory: {exc.details.get('reason', exc.message)}")
            self._error("Inventory NOT saved.")
            return False
        self._say(f"{self.character_name}'s inventory successfully saved.")
        return True


__all__ = ["InventoryConsole", "MENU_CHOICES"]
