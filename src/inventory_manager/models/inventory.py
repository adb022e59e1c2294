"""Pydantic V2 schemas for a character's inventory.

The InventoryStore is the in-memory model for one character: an ordered
list of known categories and, per category, the items keyed by their
case-folded name. Item names are unique within a category regardless of
case, while the casing first entered is kept for display and saving.

The store only offers primitives. Deciding whether an item whose quantity
drops to zero or below is removed or retained at 0 is left to the caller
(see ``inventory_manager.ui.console``).

Example:
    >>> store = InventoryStore()
    >>> result = store.upsert("Money", "Gold", 50)
    >>> [item.name for item in store.list_category_items("Money")]
    ['Gold']
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from inventory_manager.core.constants import (
    COMMENT_PREFIX,
    FIELD_DELIMITER,
    MAX_QUANTITY,
    MIN_QUANTITY,
)
from inventory_manager.core.exceptions import QuantityOverflowError, ValidationError
from inventory_manager.core.logging import get_logger
from inventory_manager.models.enums import BuiltinCategory, is_description_eligible

logger = get_logger(__name__)


DescriptionProvider = Callable[["InventoryItem | None"], "str | None"]
"""Called with the existing item (None for a new one); returns a description or None to keep it."""


def item_key(name: str) -> str:
    """Case-insensitive identity of an item name within a category."""
    return name.casefold()


def _sort_key(item: InventoryItem) -> tuple[str, str]:
    return (item.name.casefold(), item.name)


def _check_text(value: str, field_name: str, *, allow_delimiter: bool) -> str:
    if "\n" in value or "\r" in value:
        raise ValidationError(
            f"{field_name} cannot span multiple lines",
            field_name=field_name,
            invalid_value=value,
        )
    if not allow_delimiter and FIELD_DELIMITER in value:
        raise ValidationError(
            f"{field_name} cannot contain '{FIELD_DELIMITER}'",
            field_name=field_name,
            invalid_value=value,
        )
    return value


def _check_quantity(quantity: int) -> int:
    if quantity > MAX_QUANTITY or quantity < MIN_QUANTITY:
        raise QuantityOverflowError(
            "Quantity is outside the supported range",
            quantity=quantity,
        )
    return quantity


# =============================================================================
# Items
# =============================================================================


class InventoryItem(BaseModel):
    """One stack of an item held by a character.

    Attributes:
        name: Item name as entered (casing preserved).
        quantity: Number of items; may be 0 when a caller retains the entry.
        description: Free text, empty for categories without descriptions.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    name: str = Field(min_length=1, description="Item name")
    quantity: int = Field(default=0, description="Item quantity")
    description: str = Field(default="", description="Item description")

    @field_validator("description", mode="before")
    @classmethod
    def default_none_description(cls, v: object) -> object:
        """Descriptions are never None; an unset description is ''."""
        return "" if v is None else v

    @property
    def key(self) -> str:
        return item_key(self.name)


class UpsertResult(BaseModel):
    """Outcome of ``InventoryStore.upsert``.

    When ``requires_confirmation`` is set the store was left untouched:
    the resulting quantity was zero or below and the caller must either
    ``remove`` the item or retain it via ``set_quantity_and_description``.

    Attributes:
        category: Category the update targeted.
        name: Item name (existing casing if the item was already present).
        previous_quantity: Quantity before the update (0 for new items).
        new_quantity: Quantity after applying the delta.
        is_new: True if no item with this name existed in the category.
        requires_confirmation: True if the update was not applied.
        item: The stored item after the update, or the untouched existing item.
    """

    model_config = ConfigDict(frozen=True)

    category: str
    name: str
    previous_quantity: int
    new_quantity: int
    is_new: bool
    requires_confirmation: bool
    item: InventoryItem | None = None


# =============================================================================
# Store
# =============================================================================


class InventoryStore(BaseModel):
    """The complete inventory of one character.

    Every known category always has an entry in ``items``, even when it is
    empty. The four built-in categories are always known; categories found
    in a file are appended in encounter order.

    Attributes:
        categories: Known categories in display/save order.
        items: Category -> case-folded item name -> item.
    """

    model_config = ConfigDict(extra="forbid")

    categories: list[str] = Field(default_factory=BuiltinCategory.names)
    items: dict[str, dict[str, InventoryItem]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def ensure_categories(self) -> InventoryStore:
        """Keep built-ins first, register stray item categories, and re-key by name."""
        builtins = BuiltinCategory.names()
        ordered = list(builtins)
        for category in [*self.categories, *self.items]:
            if category not in ordered:
                ordered.append(category)
        self.categories = ordered
        for category in ordered:
            existing = self.items.get(category, {})
            self.items[category] = {item.key: item for item in existing.values()}
        return self

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialize(self) -> None:
        """Reset to an empty inventory holding only the built-in categories."""
        self.categories = BuiltinCategory.names()
        self.items = {category: {} for category in self.categories}

    def add_dynamic_category(self, name: str) -> bool:
        """Append a category to the known list if it is not already there.

        Dynamically added categories never carry descriptions.

        Args:
            name: Category name.

        Returns:
            True if the category was added, False if it was already known.
        """
        if name in self.items:
            return False
        _check_text(name, "category", allow_delimiter=False)
        if not name.strip() or name.startswith(COMMENT_PREFIX):
            raise ValidationError(
                "Category name cannot be blank or start with a comment marker",
                field_name="category",
                invalid_value=name,
            )
        if name != name.strip():
            # loading trims each line, so padded names would not survive a save
            raise ValidationError(
                "Category name cannot have surrounding whitespace",
                field_name="category",
                invalid_value=name,
            )
        self.categories.append(name)
        self.items[name] = {}
        logger.debug("Category added", category=name)
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_item(self, category: str, item_name: str) -> InventoryItem | None:
        """Get an item by case-insensitive name, or None."""
        return self.items.get(category, {}).get(item_key(item_name))

    def _require_category(self, category: str) -> None:
        if category not in self.items:
            raise ValidationError(
                f"Unknown category '{category}'",
                field_name="category",
                invalid_value=category,
            )

    def contains(self, category: str, item_name: str) -> bool:
        return self.get_item(category, item_name) is not None

    def list_category_items(self, category: str) -> Iterator[InventoryItem]:
        """Yield the items of a category sorted case-insensitively by name.

        A fresh generator is built on every call; unknown or empty
        categories yield nothing.
        """
        items = self.items.get(category)
        if not items:
            return
        yield from sorted(items.values(), key=_sort_key)

    def has_any_items(self) -> bool:
        return any(self.items.values())

    def item_count(self) -> int:
        """Total number of item stacks across all categories."""
        return sum(len(items) for items in self.items.values())

    def category_counts(self) -> list[tuple[str, int]]:
        """Number of item types per non-empty category, in category order."""
        return [
            (category, len(self.items[category]))
            for category in self.categories
            if self.items.get(category)
        ]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def upsert(
        self,
        category: str,
        item_name: str,
        quantity_delta: int,
        description_provider: DescriptionProvider | None = None,
    ) -> UpsertResult:
        """Add ``quantity_delta`` (possibly negative) to an item.

        If the resulting quantity is positive the item is stored. For
        description-eligible categories ``description_provider`` is asked
        for a new description; returning None keeps the current one, and a
        new item must end up with a non-empty description. Other
        categories always store an empty description.

        If the resulting quantity is zero or below nothing is changed and
        the result has ``requires_confirmation`` set.

        Args:
            category: Target category; must already be known.
            item_name: Item name, matched case-insensitively.
            quantity_delta: Amount to add (negative to subtract).
            description_provider: Supplies the description when eligible.

        Returns:
            The outcome of the update.

        Raises:
            ValidationError: If the category is not known or the name is
                invalid. Also raised when a new eligible item has no
                description.
            QuantityOverflowError: If the new quantity leaves the 64-bit range.
        """
        name = _check_text(item_name.strip(), "item_name", allow_delimiter=False)
        if not name:
            raise ValidationError("Item name cannot be empty", field_name="item_name")
        self._require_category(category)

        existing = self.get_item(category, name)
        previous = existing.quantity if existing else 0
        new_quantity = _check_quantity(previous + quantity_delta)
        display_name = existing.name if existing else name

        if new_quantity <= 0:
            return UpsertResult(
                category=category,
                name=display_name,
                previous_quantity=previous,
                new_quantity=new_quantity,
                is_new=existing is None,
                requires_confirmation=True,
                item=existing,
            )

        description = ""
        if is_description_eligible(category):
            description = existing.description if existing else ""
            supplied = description_provider(existing) if description_provider else None
            if supplied is not None:
                description = _check_text(supplied.strip(), "description", allow_delimiter=True)
            if existing is None and not description:
                raise ValidationError(
                    f"A description is required for new items in {category}",
                    field_name="description",
                )

        item = InventoryItem(name=display_name, quantity=new_quantity, description=description)
        self.items[category][item.key] = item
        return UpsertResult(
            category=category,
            name=display_name,
            previous_quantity=previous,
            new_quantity=new_quantity,
            is_new=existing is None,
            requires_confirmation=False,
            item=item,
        )

    def set_quantity_and_description(
        self,
        category: str,
        item_name: str,
        quantity: int,
        description: str | None = None,
    ) -> InventoryItem:
        """Store an item with an explicit, non-negative quantity.

        This is the "retain" path after an upsert that needs confirmation,
        typically with ``quantity=0``.

        Args:
            category: Target category; must already be known.
            item_name: Item name, matched case-insensitively.
            quantity: New quantity, at least 0.
            description: New description, or None to keep the current one.
                Ignored for categories without descriptions.

        Returns:
            The stored item.

        Raises:
            ValidationError: If ``quantity`` is negative or the category is
                not known. Also raised for an invalid name.
        """
        if quantity < 0:
            raise ValidationError(
                "Retained quantity cannot be negative",
                field_name="quantity",
                invalid_value=quantity,
            )
        _check_quantity(quantity)
        name = _check_text(item_name.strip(), "item_name", allow_delimiter=False)
        if not name:
            raise ValidationError("Item name cannot be empty", field_name="item_name")
        self._require_category(category)

        existing = self.get_item(category, name)
        final_description = ""
        if is_description_eligible(category):
            if description is not None:
                final_description = _check_text(description.strip(), "description", allow_delimiter=True)
            elif existing is not None:
                final_description = existing.description

        item = InventoryItem(
            name=existing.name if existing else name,
            quantity=quantity,
            description=final_description,
        )
        self.items[category][item.key] = item
        return item

    def put_record(
        self,
        category: str,
        item_name: str,
        quantity: int,
        description: str = "",
    ) -> InventoryItem:
        """Insert or replace an item exactly as read from a file.

        The last record for a (category, name) pair wins, including its
        casing. Descriptions are dropped for categories without them.
        """
        self.add_dynamic_category(category)
        item = InventoryItem(
            name=item_name,
            quantity=quantity,
            description=description if is_description_eligible(category) else "",
        )
        self.items[category][item.key] = item
        return item

    def remove(self, category: str, item_name: str) -> InventoryItem | None:
        """Delete an item if present.

        Returns:
            The removed item, or None if there was nothing to remove.
        """
        items = self.items.get(category)
        if items is None:
            return None
        return items.pop(item_key(item_name), None)


__all__ = [
    "DescriptionProvider",
    "InventoryItem",
    "InventoryStore",
    "UpsertResult",
    "item_key",
]
