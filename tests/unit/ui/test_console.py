"""Tests for the interactive inventory console."""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from inventory_manager.models import InventoryItem, InventoryStore
from inventory_manager.storage.directory import InventoryDirectory
from inventory_manager.ui.console import InventoryConsole


AppFactory = Callable[..., InventoryConsole]


@pytest.fixture
def make_app(
    scripted_prompter: type,
    inventory_directory: InventoryDirectory,
    console: Console,
) -> AppFactory:
    """Build a console with scripted answers and, optionally, an active character."""

    def factory(
        answers: Sequence[Any],
        store: InventoryStore | None = None,
        character_name: str | None = "Thorin",
        directory: InventoryDirectory | None = None,
    ) -> InventoryConsole:
        app = InventoryConsole(
            prompter=scripted_prompter(answers),
            directory=directory or inventory_directory,
            console=console,
        )
        if store is not None:
            app.store = store
            app.character_name = character_name
        return app

    return factory


def assert_all_answers_used(app: InventoryConsole) -> None:
    assert app.prompter.answers == []


class TestCharacterSelection:
    """Tests for choosing or creating the active character."""

    def test_create_new_character_after_invalid_name(
        self, make_app: AppFactory, output: io.StringIO
    ) -> None:
        app = make_app([0, "bad/name", "Thorin"])

        store = app.select_or_create_character()

        assert app.character_name == "Thorin"
        assert store == InventoryStore()
        text = output.getvalue()
        assert "(No existing character inventories found)" in text
        assert "invalid characters" in text
        assert "Creating new inventory for Thorin." in text
        assert app.prompter.asked == ["Enter selection", "Enter new character name", "Enter new character name"]

    def test_duplicate_name_rejected(
        self, make_app: AppFactory, inventory_directory: InventoryDirectory, output: io.StringIO
    ) -> None:
        inventory_directory.path_for("Thorin").write_text("", encoding="utf-8")
        app = make_app([0, "thorin", "Bilbo"])

        app.select_or_create_character()

        assert app.character_name == "Bilbo"
        assert "already exists" in output.getvalue()

    def test_load_existing_with_warnings(
        self, make_app: AppFactory, inventory_directory: InventoryDirectory, output: io.StringIO
    ) -> None:
        inventory_directory.path_for("Thorin").write_text(
            "# Inventory Data for: Thorin\nWeapons;Dagger;x;Sharp\nSpells;Fireball;1\nMoney;Gold;5\n",
            encoding="utf-8",
        )
        app = make_app([1])

        store = app.select_or_create_character()

        assert app.character_name == "Thorin"
        assert store.get_item("Money", "Gold").quantity == 5
        assert store.categories[-1] == "Spells"
        text = output.getvalue()
        assert "1. Thorin" in text
        assert "Warning: Skipping line 2 (invalid quantity)" in text
        assert "Warning: Category 'Spells' found in file but not pre-defined. Added it." in text
        assert "Inventory for Thorin loaded successfully." in text

    def test_load_error_starts_empty(
        self, make_app: AppFactory, inventory_directory: InventoryDirectory, output: io.StringIO
    ) -> None:
        inventory_directory.path_for("Thorin").write_bytes(b"\xff\xfe\xfa\n")
        app = make_app([1])

        store = app.select_or_create_character()

        assert store == InventoryStore()
        text = output.getvalue()
        assert "Error loading inventory" in text
        assert "Starting with empty inventory due to loading error." in text


class TestAddItem:
    """Tests for the add/update action."""

    def test_add_new_weapon(self, make_app: AppFactory, output: io.StringIO) -> None:
        app = make_app(["Weapons", "Dagger", 2, "Sharp"], store=InventoryStore())

        app.add_item()

        assert app.inventory.get_item("Weapons", "Dagger") == InventoryItem(
            name="Dagger", quantity=2, description="Sharp"
        )
        assert app.prompter.asked == [
            "select category",
            "Enter the name of the item",
            "Enter the quantity to add (can be negative to subtract)",
            "Enter description for new item 'Dagger'",
        ]
        text = output.getvalue()
        assert "Updated 'Dagger' in Weapons. New quantity: 2" in text
        assert 'Description: "Sharp"' in text

    def test_add_money_never_asks_for_description(self, make_app: AppFactory) -> None:
        app = make_app(["Money", "Gold", 50], store=InventoryStore())

        app.add_item()

        assert app.inventory.get_item("Money", "Gold") == InventoryItem(name="Gold", quantity=50)
        assert_all_answers_used(app)

    def test_existing_item_keeps_description(self, make_app: AppFactory, sample_store: InventoryStore) -> None:
        app = make_app(["Weapons", "LONGSWORD", 2, False], store=sample_store)

        app.add_item()

        assert sample_store.get_item("Weapons", "Longsword") == InventoryItem(
            name="Longsword", quantity=3, description="Dwarven steel"
        )
        assert app.prompter.asked[-1] == 'Update description for \'Longsword\'? (Current: "Dwarven steel")'

    def test_existing_item_new_description(self, make_app: AppFactory, sample_store: InventoryStore) -> None:
        app = make_app(["Weapons", "Longsword", 1, True, "Notched"], store=sample_store)

        app.add_item()

        assert sample_store.get_item("Weapons", "Longsword").description == "Notched"

    def test_subtract_to_zero_and_remove(
        self, make_app: AppFactory, sample_store: InventoryStore, output: io.StringIO
    ) -> None:
        app = make_app(["Weapons", "Longsword", -1, True], store=sample_store)

        app.add_item()

        assert sample_store.contains("Weapons", "Longsword") is False
        text = output.getvalue()
        assert "Resulting quantity for 'Longsword' is 0." in text
        assert "Item 'Longsword' removed from Weapons." in text

    def test_subtract_to_zero_and_retain_with_description(
        self, make_app: AppFactory, sample_store: InventoryStore, output: io.StringIO
    ) -> None:
        app = make_app(["Weapons", "Longsword", -1, False, True, "Broken hilt"], store=sample_store)

        app.add_item()

        assert sample_store.get_item("Weapons", "Longsword") == InventoryItem(
            name="Longsword", quantity=0, description="Broken hilt"
        )
        assert "Item 'Longsword' quantity set to 0 in Weapons." in output.getvalue()

    def test_subtract_below_zero_and_retain_money(
        self, make_app: AppFactory, sample_store: InventoryStore
    ) -> None:
        app = make_app(["Money", "Gold", -60, False], store=sample_store)

        app.add_item()

        assert sample_store.get_item("Money", "Gold").quantity == 0
        assert_all_answers_used(app)

    def test_negative_on_missing_item_adds_nothing(
        self, make_app: AppFactory, output: io.StringIO
    ) -> None:
        app = make_app(["Money", "Silver", -3, True], store=InventoryStore())

        app.add_item()

        assert app.inventory.has_any_items() is False
        assert "Item 'Silver' was not in Money; nothing added." in output.getvalue()

    def test_invalid_item_name_reports_error(self, make_app: AppFactory, output: io.StringIO) -> None:
        app = make_app(["Money", "Bow;Arrows", 1], store=InventoryStore())

        app.add_item()

        assert app.inventory.has_any_items() is False
        assert "cannot contain ';'" in output.getvalue()


class TestDeleteItem:
    """Tests for the delete action."""

    def test_delete_after_confirmation(
        self, make_app: AppFactory, sample_store: InventoryStore, output: io.StringIO
    ) -> None:
        app = make_app(["Weapons", 2, True], store=sample_store)

        app.delete_item()

        assert sample_store.contains("Weapons", "Longsword") is False
        assert sample_store.contains("Weapons", "dagger") is True
        text = output.getvalue()
        assert '2. Longsword (1) - "Dwarven steel"' in text
        assert "Item 'Longsword' removed from Weapons." in text

    def test_delete_cancelled(
        self, make_app: AppFactory, sample_store: InventoryStore, output: io.StringIO
    ) -> None:
        app = make_app(["Weapons", 1, False], store=sample_store)

        app.delete_item()

        assert sample_store.contains("Weapons", "dagger") is True
        assert "Deletion cancelled." in output.getvalue()

    def test_empty_inventory(self, make_app: AppFactory, output: io.StringIO) -> None:
        app = make_app([], store=InventoryStore())

        app.delete_item()

        assert "Inventory is empty. Nothing to delete." in output.getvalue()
        assert app.prompter.asked == []

    def test_empty_category(self, make_app: AppFactory, output: io.StringIO) -> None:
        store = InventoryStore()
        store.put_record("Weapons", "Dagger", 1, "Sharp")
        app = make_app(["Money"], store=store)

        app.delete_item()

        assert "Category 'Money' is empty or does not exist." in output.getvalue()
        assert store.item_count() == 1


class TestPrintInventory:
    """Tests for the print action."""

    def test_print_all_hides_descriptions(
        self, make_app: AppFactory, sample_store: InventoryStore, output: io.StringIO
    ) -> None:
        sample_store.remove("Important Items", "Map of Phandalin")
        app = make_app([1], store=sample_store)

        app.print_inventory()

        text = output.getvalue()
        assert "--- INVENTORY REPORT for Thorin ---" in text
        assert "Category: Weapons" in text
        assert "Category: Important Items" not in text
        assert "Longsword" in text
        assert "Dwarven steel" not in text
        assert "--- END OF REPORT ---" in text
        assert text.index("dagger") < text.index("Longsword")

    def test_print_category_shows_descriptions(
        self, make_app: AppFactory, sample_store: InventoryStore, output: io.StringIO
    ) -> None:
        app = make_app([2, "Weapons"], store=sample_store)

        app.print_inventory()

        text = output.getvalue()
        assert "Dwarven steel" in text
        assert "Category: Money" not in text

    def test_print_empty_category(self, make_app: AppFactory, output: io.StringIO) -> None:
        store = InventoryStore()
        store.put_record("Weapons", "Dagger", 1, "Sharp")
        app = make_app([2, "Money"], store=store)

        app.print_inventory()

        assert "No items in this category." in output.getvalue()

    def test_print_empty_inventory(self, make_app: AppFactory, output: io.StringIO) -> None:
        app = make_app([], store=InventoryStore())

        app.print_inventory()

        assert "Inventory is currently empty." in output.getvalue()


class TestSaveAndMenu:
    """Tests for saving and the main menu loop."""

    def test_save_writes_file(
        self,
        make_app: AppFactory,
        sample_store: InventoryStore,
        inventory_directory: InventoryDirectory,
        output: io.StringIO,
    ) -> None:
        app = make_app([], store=sample_store)

        assert app.save_inventory() is True

        content = inventory_directory.path_for("Thorin").read_text(encoding="utf-8")
        assert content.startswith("# Inventory Data for: Thorin\n")
        assert "Money;Gold;50\n" in content
        assert "Thorin's inventory successfully saved." in output.getvalue()

    def test_save_failure_reported(
        self, make_app: AppFactory, sample_store: InventoryStore, tmp_path: Path, output: io.StringIO
    ) -> None:
        app = make_app([], store=sample_store, directory=InventoryDirectory(tmp_path / "absent"))

        assert app.save_inventory() is False
        assert "Inventory NOT saved." in output.getvalue()

    def test_menu_summary(self, make_app: AppFactory, sample_store: InventoryStore, output: io.StringIO) -> None:
        app = make_app([], store=sample_store)

        app.display_menu()

        text = output.getvalue()
        assert "Category [Weapons]: 2 item types" in text
        assert "Category [Money]: 2 item types" in text

    def test_menu_summary_empty(self, make_app: AppFactory, output: io.StringIO) -> None:
        app = make_app([], store=InventoryStore())

        app.display_menu()

        assert "Inventory is currently empty." in output.getvalue()

    def test_quit_with_save(
        self,
        make_app: AppFactory,
        sample_store: InventoryStore,
        inventory_directory: InventoryDirectory,
        output: io.StringIO,
    ) -> None:
        app = make_app(["q", True], store=sample_store)

        app.run_menu()

        assert inventory_directory.path_for("Thorin").exists()
        assert "Exiting Inventory Manager for Thorin." in output.getvalue()
        assert app.prompter.asked == ["Enter your choice", "Save Thorin's inventory before quitting?"]

    def test_quit_without_save(
        self, make_app: AppFactory, sample_store: InventoryStore, inventory_directory: InventoryDirectory
    ) -> None:
        app = make_app(["Q", False], store=sample_store)

        app.run_menu()

        assert not inventory_directory.path_for("Thorin").exists()

    def test_run_with_unusable_directory(self, make_app: AppFactory, tmp_path: Path, output: io.StringIO) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        app = make_app([], directory=InventoryDirectory(blocker))

        assert app.run() == 1
        assert "Exiting." in output.getvalue()
        assert app.prompter.asked == []

    def test_inventory_requires_character(self, make_app: AppFactory) -> None:
        with pytest.raises(RuntimeError):
            _ = make_app([]).inventory
