"""Tests for the rich-backed prompter."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest
from rich.console import Console

from inventory_manager.ui.prompts import RichPrompter


@pytest.fixture
def feed_input(monkeypatch: pytest.MonkeyPatch):
    """Replace ``input()`` with a fixed sequence of typed lines."""

    def feed(*lines: str) -> None:
        replies: Iterator[str] = iter(lines)
        monkeypatch.setattr("builtins.input", lambda *args: next(replies))

    return feed


@pytest.fixture
def prompter(console: Console) -> RichPrompter:
    return RichPrompter(console)


class TestRichPrompter:
    """Tests for RichPrompter input validation."""

    def test_ask_text_retries_blank(self, prompter: RichPrompter, feed_input, output: io.StringIO) -> None:
        feed_input("   ", "  Rope  ")

        assert prompter.ask_text("Enter the name of the item") == "Rope"
        assert "at least one character" in output.getvalue()

    def test_ask_int_accepts_negative(self, prompter: RichPrompter, feed_input) -> None:
        feed_input("lots", "-4")

        assert prompter.ask_int("Enter the quantity") == -4

    def test_ask_int_in_range_retries(self, prompter: RichPrompter, feed_input, output: io.StringIO) -> None:
        feed_input("7", "0", "2")

        assert prompter.ask_int_in_range("Enter selection", 1, 3) == 2
        text = output.getvalue()
        assert "Enter selection [1-3]" in text
        assert "between 1 and 3" in text

    def test_ask_choice_ignores_case(self, prompter: RichPrompter, feed_input) -> None:
        feed_input("x", "d")

        assert prompter.ask_choice("Enter your choice", ("A", "D", "Q")) == "D"

    @pytest.mark.parametrize("reply,expected", [("y", True), ("N", False)])
    def test_confirm(self, prompter: RichPrompter, feed_input, reply: str, expected: bool) -> None:
        feed_input(reply)

        assert prompter.confirm("Remove this item completely?") is expected

    def test_select_category_by_number(self, prompter: RichPrompter, feed_input, output: io.StringIO) -> None:
        feed_input("5", "2")

        assert prompter.select_category(["Weapons", "Money"]) == "Money"
        assert "2. Money" in output.getvalue()
