"""Text persistence for character inventories.

Each character's inventory is a flat UTF-8 text file with one record per
item::

    # Inventory Data for: Thorin
    # Saved on: 2024-05-01T18:22:03.512345
    # Format: Category;ItemName;Quantity[;Description]
    Weapons;Dagger;2;Balanced for throwing; +1
    Money;Gold;50

Loading is tolerant: blank lines and ``#`` comments are skipped, and a
malformed record only produces a ``ParseWarning`` before the next line is
read. Only failing to read the file at all aborts a load.

Saving writes to a temporary file beside the target and replaces the
target in one step, so a failed save never leaves a truncated inventory.
"""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from collections.abc import Iterable
from contextlib import suppress
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from inventory_manager.core.constants import (
    COMMENT_PREFIX,
    FIELD_DELIMITER,
    FORMAT_DESCRIPTION,
    MAX_QUANTITY,
    MAX_RECORD_FIELDS,
    MIN_QUANTITY,
    MIN_RECORD_FIELDS,
    QUANTITY_PATTERN,
)
from inventory_manager.core.exceptions import LoadError, SaveError
from inventory_manager.core.logging import get_logger
from inventory_manager.models.enums import is_description_eligible
from inventory_manager.models.inventory import InventoryItem, InventoryStore

logger = get_logger(__name__)

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def _is_writable(path: Path) -> bool:
    """True if ``path`` has a write bit set and the process may write it."""
    return bool(path.stat().st_mode & _WRITE_BITS) and os.access(path, os.W_OK)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _copy_file_mode(path: Path, temp_name: str) -> None:
    """Give the temp file the permissions the saved file should end up with.

    An existing inventory keeps its mode; a new one gets the usual
    ``0o666`` minus the umask instead of the temp file's ``0o600``.
    """
    if path.exists():
        shutil.copymode(path, temp_name)
    else:
        os.chmod(temp_name, 0o666 & ~_current_umask())


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class ParsedRecord:
    """One valid record read from an inventory file.

    Attributes:
        line_number: 1-based line number in the file.
        category: Category field as written.
        item_name: Item name field as written.
        quantity: Parsed quantity.
        description: Description, already empty for ineligible categories.
    """

    line_number: int
    category: str
    item_name: str
    quantity: int
    description: str = ""


@dataclass(frozen=True)
class ParseWarning:
    """A line that was skipped while loading.

    Attributes:
        line_number: 1-based line number in the file.
        line: The offending line, stripped.
        reason: Why the line was skipped.
    """

    line_number: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"Skipping line {self.line_number} ({self.reason}): {self.line}"


@dataclass
class LoadReport:
    """Summary of one load.

    Attributes:
        store: The store that was populated.
        path: File that was read, if any.
        found: False if the file did not exist (the store is empty).
        records_loaded: Number of valid records applied.
        warnings: Lines skipped, in file order.
        added_categories: Categories discovered in the file, in encounter order.
    """

    store: InventoryStore
    path: Path | None = None
    found: bool = True
    records_loaded: int = 0
    warnings: list[ParseWarning] = field(default_factory=list)
    added_categories: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if every non-comment line was a valid record."""
        return not self.warnings


# =============================================================================
# Codec
# =============================================================================


class InventoryCodec:
    """Reads and writes the ``Category;ItemName;Quantity[;Description]`` format.

    The codec is stateless between calls; the only persistent state is the
    file itself.
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        """Initialize codec.

        Args:
            encoding: Text encoding of inventory files.
        """
        self.encoding = encoding

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    def parse_line(self, line: str, line_number: int) -> ParsedRecord | ParseWarning | None:
        """Parse a single line.

        Args:
            line: Raw line, with or without its line ending.
            line_number: 1-based line number, for reporting.

        Returns:
            A record, a warning for a malformed line, or None for blank and
            comment lines.
        """
        text = line.strip()
        if not text or text.startswith(COMMENT_PREFIX):
            return None

        parts = text.split(FIELD_DELIMITER, MAX_RECORD_FIELDS - 1)
        if len(parts) < MIN_RECORD_FIELDS:
            return ParseWarning(line_number, text, "malformed record")

        category, item_name, raw_quantity = parts[0], parts[1], parts[2]
        if not category.strip() or not item_name.strip():
            return ParseWarning(line_number, text, "missing category or item name")
        if category != category.strip():
            return ParseWarning(line_number, text, "category has surrounding whitespace")

        if not QUANTITY_PATTERN.fullmatch(raw_quantity):
            return ParseWarning(line_number, text, "invalid quantity")
        quantity = int(raw_quantity)
        if quantity > MAX_QUANTITY or quantity < MIN_QUANTITY:
            return ParseWarning(line_number, text, "quantity out of range")

        description = ""
        if len(parts) == MAX_RECORD_FIELDS and is_description_eligible(category):
            description = parts[3]

        return ParsedRecord(line_number, category, item_name, quantity, description)

    def read_lines(self, lines: Iterable[str], store: InventoryStore) -> LoadReport:
        """Apply every valid record in ``lines`` to ``store``.

        The store is not cleared first; ``load`` does that.

        Args:
            lines: Lines of an inventory file.
            store: Store to populate.

        Returns:
            Report of records applied and lines skipped.
        """
        report = LoadReport(store=store)
        for line_number, line in enumerate(lines, start=1):
            outcome = self.parse_line(line, line_number)
            if outcome is None:
                continue
            if isinstance(outcome, ParseWarning):
                logger.warning(
                    "Skipping inventory line",
                    line_number=outcome.line_number,
                    reason=outcome.reason,
                    line=outcome.line,
                )
                report.warnings.append(outcome)
                continue

            if store.add_dynamic_category(outcome.category):
                logger.warning(
                    "Category found in file but not pre-defined, adding it",
                    category=outcome.category,
                    line_number=outcome.line_number,
                )
                report.added_categories.append(outcome.category)
            store.put_record(
                outcome.category,
                outcome.item_name,
                outcome.quantity,
                outcome.description,
            )
            report.records_loaded += 1
        return report

    def load(self, path: str | Path, store: InventoryStore | None = None) -> LoadReport:
        """Replace the contents of ``store`` with the inventory in ``path``.

        A missing file is not an error: the store is left empty and the
        report has ``found=False``.

        Args:
            path: Inventory file to read.
            store: Store to populate; a new one is created if omitted.

        Returns:
            Report of the load, carrying the populated store.

        Raises:
            LoadError: If the file exists but cannot be read. The store has
                been reset to its empty state.
        """
        path = Path(path)
        store = store if store is not None else InventoryStore()
        store.initialize()
        logger.debug("Loading inventory", path=str(path))

        try:
            with path.open("r", encoding=self.encoding) as handle:
                report = self.read_lines(handle, store)
        except FileNotFoundError:
            logger.info("Inventory file not found, starting empty", path=str(path))
            return LoadReport(store=store, path=path, found=False)
        except (OSError, UnicodeDecodeError) as exc:
            store.initialize()
            logger.error("Failed to load inventory", path=str(path), error=str(exc))
            raise LoadError(
                "Error loading inventory, starting with an empty inventory",
                path=str(path),
                details={"reason": str(exc)},
            ) from exc

        report.path = path
        logger.info(
            "Inventory loaded",
            path=str(path),
            records=report.records_loaded,
            skipped=len(report.warnings),
        )
        return report

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    @staticmethod
    def format_record(category: str, item: InventoryItem) -> str:
        """Format one item as a record line, without line ending."""
        fields = [category, item.name, str(item.quantity)]
        if is_description_eligible(category) and item.description:
            fields.append(item.description)
        return FIELD_DELIMITER.join(fields)

    def format_header(self, character_name: str, saved_at: datetime) -> list[str]:
        return [
            f"{COMMENT_PREFIX} Inventory Data for: {character_name}",
            f"{COMMENT_PREFIX} Saved on: {saved_at.isoformat()}",
            f"{COMMENT_PREFIX} Format: {FORMAT_DESCRIPTION}",
        ]

    def dumps(
        self,
        store: InventoryStore,
        character_name: str,
        saved_at: datetime | None = None,
    ) -> str:
        """Serialize ``store`` to the canonical text format.

        Categories are written in their known order and items sorted
        case-insensitively; empty categories produce no lines.

        Args:
            store: Inventory to serialize.
            character_name: Name written into the header.
            saved_at: Header timestamp; defaults to now.

        Returns:
            File contents, newline-terminated.
        """
        lines = self.format_header(character_name, saved_at or datetime.now())
        for category in store.categories:
            lines.extend(
                self.format_record(category, item)
                for item in store.list_category_items(category)
            )
        return "\n".join(lines) + "\n"

    def save(
        self,
        path: str | Path,
        store: InventoryStore,
        character_name: str,
        saved_at: datetime | None = None,
    ) -> Path:
        """Write ``store`` to ``path``.

        The data goes to a temporary file in the same directory first and
        is then moved over ``path``, so the previous file survives any
        failure. The saved file keeps the permissions of the one it
        replaces. The store is never modified.

        Args:
            path: Destination inventory file.
            store: Inventory to write.
            character_name: Name written into the header.
            saved_at: Header timestamp; defaults to now.

        Returns:
            The path written.

        Raises:
            SaveError: If the directory is missing or not writable, if the
                existing file is read-only, or if the write fails.
        """
        path = Path(path)
        if path.exists() and not _is_writable(path):
            logger.error("Inventory file is read-only", path=str(path))
            raise SaveError(
                "Inventory NOT saved",
                path=str(path),
                details={"reason": "the inventory file is read-only"},
            )

        content = self.dumps(store, character_name, saved_at)
        temp_name: str | None = None

        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=self.encoding,
                dir=path.parent,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(content)
            _copy_file_mode(path, temp_name)
            os.replace(temp_name, path)
        except (OSError, UnicodeError) as exc:
            if temp_name is not None:
                with suppress(OSError):
                    os.unlink(temp_name)
            logger.error("Failed to save inventory", path=str(path), error=str(exc))
            raise SaveError(
                "Inventory NOT saved",
                path=str(path),
                details={"reason": str(exc)},
            ) from exc

        logger.info("Inventory saved", path=str(path), items=store.item_count())
        return path


__all__ = [
    "InventoryCodec",
    "LoadReport",
    "ParseWarning",
    "ParsedRecord",
]
