"""Console entry point for the Character Inventory Manager.

Run with::

    inventory-manager
    # or
    python -m inventory_manager
"""

from __future__ import annotations

import sys

from rich.console import Console

from inventory_manager.core.config import get_settings
from inventory_manager.core.exceptions import ConfigurationError
from inventory_manager.core.logging import configure_logging, get_logger
from inventory_manager.storage.codec import InventoryCodec
from inventory_manager.storage.directory import InventoryDirectory
from inventory_manager.ui.console import InventoryConsole
from inventory_manager.ui.prompts import RichPrompter

logger = get_logger(__name__)


def main() -> int:
    """Configure the application and run one interactive session.

    Returns:
        Process exit code.
    """
    console = Console()
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc.message}", highlight=False)
        return 2

    configure_logging(level=settings.effective_log_level, json_format=settings.log_json)
    logger.debug("Starting", app=settings.app_name, version=settings.app_version)

    app = InventoryConsole(
        prompter=RichPrompter(console),
        directory=InventoryDirectory.from_settings(settings.storage),
        codec=InventoryCodec(encoding=settings.storage.encoding),
        console=console,
    )
    try:
        return app.run()
    except (KeyboardInterrupt, EOFError):
        console.print("\nInterrupted. Unsaved changes were discarded.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
