"""In-memory catalog of circulating items."""

import logging
from typing import Optional

from ..errors import AmbiguousItemError, DuplicateItemError
from .models import CatalogItem, ItemCategory
from .schemas import ItemCreate

logger = logging.getLogger(__name__)


class Catalog:
    """Holds every item the library can lend.

    Items are keyed by category and item ID, so a book and a CD may share a
    code.
    """

    def __init__(self) -> None:
        self._items: dict[tuple[ItemCategory, str], CatalogItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(key[1] == item_id for key in self._items)

    def add(self, item: CatalogItem) -> CatalogItem:
        """Add an item to the catalog.

        Args:
            item: Item to add

        Returns:
            The added item

        Raises:
            ValueError: If the item or its key is missing
            DuplicateItemError: If an item of the same category has the same ID
        """
        if item is None:
            raise ValueError("Item cannot be None")
        if not item.item_id or not item.item_id.strip():
            raise ValueError("Item ID cannot be blank")
        key = (item.category, item.item_id)
        if key in self._items:
            raise DuplicateItemError(f"Duplicate {item.category.value} ID: {item.item_id}")

        self._items[key] = item
        logger.info("Catalogued %s %s (%s)", item.category.value, item.item_id, item.title)
        return item

    def create(self, data: ItemCreate) -> CatalogItem:
        """Create and add an item from validated input."""
        item = CatalogItem(
            item_id=data.item_id,
            title=data.title,
            category=data.category,
            creator=data.creator,
            quantity=data.quantity,
        )
        return self.add(item)

    def get(
        self, item_id: Optional[str], category: Optional[ItemCategory] = None
    ) -> Optional[CatalogItem]:
        """Get an item by its ID.

        Args:
            item_id: ISBN, catalog number or ISSN
            category: Needed only when the ID is shared across categories

        Raises:
            AmbiguousItemError: If no category is given and several items
                share the ID
        """
        if item_id is None:
            return None
        if category is not None:
            return self._items.get((ItemCategory(category), item_id))

        matches = [item for (_, key), item in self._items.items() if key == item_id]
        if len(matches) > 1:
            categories = ", ".join(i.category.value for i in matches)
            raise AmbiguousItemError(f"Item ID {item_id} is used by {categories}; pass a category")
        return matches[0] if matches else None

    def search_by_title(self, query: Optional[str]) -> list[CatalogItem]:
        """Case-insensitive substring search on titles."""
        if query is None:
            return []
        q = query.lower()
        return [i for i in self._items.values() if i.title and q in i.title.lower()]

    def search_by_creator(self, query: Optional[str]) -> list[CatalogItem]:
        """Case-insensitive substring search on author / artist / publisher."""
        if query is None:
            return []
        q = query.lower()
        return [i for i in self._items.values() if i.creator and q in i.creator.lower()]

    def items(self, category: Optional[ItemCategory] = None) -> list[CatalogItem]:
        """List items in insertion order, optionally for one category."""
        if category is None:
            return list(self._items.values())
        return [i for i in self._items.values() if i.category == category]

    def available_items(self) -> list[CatalogItem]:
        return [i for i in self._items.values() if i.is_available]
