"""Pytest configuration and shared fixtures.

This module provides common fixtures for the inventory manager test suite:
sample stores, a temporary inventory directory, and a scripted prompter
that replays answers to the console workflow.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import pytest
from rich.console import Console


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from inventory_manager.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "INVENTORY_MANAGER_DEBUG": "true",
        "INVENTORY_MANAGER_LOG_LEVEL": "ERROR",
        "INVENTORY_MANAGER_INVENTORY_DIR": str(tmp_path / "inventories"),
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_store() -> Any:
    """Create a store with items in every built-in category.

    Returns:
        InventoryStore instance.
    """
    from inventory_manager.models.inventory import InventoryStore

    store = InventoryStore()
    store.put_record("Weapons", "Longsword", 1, "Dwarven steel")
    store.put_record("Weapons", "dagger", 3, "")
    store.put_record("Important Items", "Map of Phandalin", 1, "Marked with an X")
    store.put_record("General Items", "Rope (50 ft)", 2, "Hempen")
    store.put_record("General Items", "Torch", 10, "")
    store.put_record("Money", "Gold", 50)
    store.put_record("Money", "copper", 7)
    return store


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def codec() -> Any:
    """Create an InventoryCodec.

    Returns:
        InventoryCodec instance.
    """
    from inventory_manager.storage.codec import InventoryCodec

    return InventoryCodec()


@pytest.fixture
def inventory_dir(tmp_path: Path) -> Path:
    """Create a temporary inventory directory.

    Returns:
        Path to the directory.
    """
    directory = tmp_path / "DnD_Information"
    directory.mkdir()
    return directory


@pytest.fixture
def inventory_directory(inventory_dir: Path) -> Any:
    """Create an InventoryDirectory over the temporary directory.

    Returns:
        InventoryDirectory instance.
    """
    from inventory_manager.storage.directory import InventoryDirectory

    return InventoryDirectory(inventory_dir)


# =============================================================================
# UI Fixtures
# =============================================================================


class ScriptedPrompter:
    """Prompter that replays a fixed list of answers.

    Every prompt consumes the next answer; ``asked`` records the prompt
    messages in order so tests can assert on the conversation.
    """

    def __init__(self, answers: Sequence[Any]) -> None:
        self.answers = list(answers)
        self.asked: list[str] = []

    def _next(self, message: str) -> Any:
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"No scripted answer left for prompt: {message!r}")
        return self.answers.pop(0)

    def select_category(self, categories: Sequence[str]) -> str:
        answer = self._next("select category")
        assert answer in categories
        return answer

    def confirm(self, message: str) -> bool:
        answer = self._next(message)
        assert isinstance(answer, bool)
        return answer

    def ask_text(self, message: str) -> str:
        return str(self._next(message))

    def ask_int(self, message: str) -> int:
        return int(self._next(message))

    def ask_int_in_range(self, message: str, low: int, high: int) -> int:
        answer = int(self._next(message))
        assert low <= answer <= high
        return answer

    def ask_choice(self, message: str, choices: Sequence[str]) -> str:
        answer = str(self._next(message))
        assert answer.upper() in {choice.upper() for choice in choices}
        return answer


@pytest.fixture
def scripted_prompter() -> type[ScriptedPrompter]:
    """Provide the ScriptedPrompter class.

    Returns:
        The ScriptedPrompter class, to be instantiated with answers.
    """
    return ScriptedPrompter


@pytest.fixture
def output() -> io.StringIO:
    """Buffer capturing console output."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Create a plain, wide rich Console writing into ``output``."""
    return Console(file=output, width=200, color_system=None, force_terminal=False)
