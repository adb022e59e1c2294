"""Validated console input.

``Prompter`` is the input surface the inventory workflow depends on.
``RichPrompter`` implements it on top of ``rich.prompt`` and keeps asking
until the answer is valid, so callers never see bad input.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt


class Prompter(Protocol):
    """Console input needed by the inventory workflow."""

    def select_category(self, categories: Sequence[str]) -> str:
        """Pick one of the known categories, in their defined order."""
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        ...

    def ask_text(self, message: str) -> str:
        """Ask for a non-empty string."""
        ...

    def ask_int(self, message: str) -> int:
        """Ask for any integer, positive or negative."""
        ...

    def ask_int_in_range(self, message: str, low: int, high: int) -> int:
        """Ask for an integer in ``[low, high]``."""
        ...

    def ask_choice(self, message: str, choices: Sequence[str]) -> str:
        """Ask for one of ``choices``, ignoring case."""
        ...


class RichPrompter:
    """Prompter backed by rich's Prompt, IntPrompt and Confirm."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def select_category(self, categories: Sequence[str]) -> str:
        self.console.print("\nSelect a Category:")
        for index, category in enumerate(categories, start=1):
            self.console.print(f"{index}. {escape(category)}")
        choice = self.ask_int_in_range("Enter category number", 1, len(categories))
        return categories[choice - 1]

    def confirm(self, message: str) -> bool:
        return Confirm.ask(escape(message), console=self.console)

    def ask_text(self, message: str) -> str:
        while True:
            value = Prompt.ask(escape(message), console=self.console).strip()
            if value:
                return value
            self.console.print("[prompt.invalid]You must enter at least one character.")

    def ask_int(self, message: str) -> int:
        return IntPrompt.ask(escape(message), console=self.console)

    def ask_int_in_range(self, message: str, low: int, high: int) -> int:
        while True:
            value = IntPrompt.ask(escape(f"{message} [{low}-{high}]"), console=self.console)
            if low <= value <= high:
                return value
            self.console.print(
                f"[prompt.invalid]Please enter a number between {low} and {high}."
            )

    def ask_choice(self, message: str, choices: Sequence[str]) -> str:
        allowed = {choice.upper(): choice for choice in choices}
        while True:
            value = Prompt.ask(
                escape(f"{message} [{'/'.join(choices)}]"),
                console=self.console,
            ).strip()
            if value.upper() in allowed:
                return allowed[value.upper()]
            self.console.print("[prompt.invalid]Invalid choice. Please try again.")


__all__ = ["Prompter", "RichPrompter"]
