"""Catalog item model.

Books, CDs and journals share one dataclass tagged by ``ItemCategory``.
Behavior that differs per category (loan period, quantity handling,
availability) dispatches on the tag. Only books carry a quantity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import QuantityError


class ItemCategory(str, Enum):
    """Kind of physical media."""

    BOOK = "book"
    CD = "cd"
    JOURNAL = "journal"

    @property
    def loan_period_days(self) -> int:
        """Days an item of this category may be kept."""
        return LOAN_PERIODS[self]

    @property
    def label(self) -> str:
        """Plural noun used in patron-facing messages."""
        return "books" if self is ItemCategory.BOOK else "items"


LOAN_PERIODS: dict[ItemCategory, int] = {
    ItemCategory.BOOK: 28,
    ItemCategory.CD: 7,
    ItemCategory.JOURNAL: 14,
}


@dataclass(eq=False)
class CatalogItem:
    """A circulating item.

    ``item_id`` is the ISBN for books, the catalog number for CDs and the
    ISSN for journals.
    """

    item_id: str
    title: str
    category: ItemCategory
    creator: Optional[str] = None
    available: bool = True
    quantity: Optional[int] = None

    def __post_init__(self) -> None:
        self.category = ItemCategory(self.category)
        if self.category is ItemCategory.BOOK:
            if self.quantity is None:
                self.quantity = 1
            if self.quantity < 0:
                raise QuantityError(f"Quantity cannot be negative: {self.quantity}")
        elif self.quantity is not None:
            raise QuantityError(f"Only books carry a quantity, not {self.category.value}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogItem):
            return NotImplemented
        return self.category == other.category and self.item_id == other.item_id

    def __hash__(self) -> int:
        return hash((self.category, self.item_id))

    def __repr__(self) -> str:
        return f"<CatalogItem(id={self.item_id}, category={self.category.value}, title='{self.title}')>"

    @property
    def is_book(self) -> bool:
        return self.category is ItemCategory.BOOK

    @property
    def loan_period_days(self) -> int:
        return self.category.loan_period_days

    @property
    def is_available(self) -> bool:
        """Whether a copy can be lent right now."""
        if self.is_book:
            return self.quantity > 0 and self.available
        return self.available

    def decrement_quantity(self) -> int:
        """Take one copy off the shelf.

        Raises:
            QuantityError: If no copies are left or the item is not a book
        """
        self._require_book()
        if self.quantity <= 0:
            raise QuantityError(f"No copies left to lend for {self.item_id}")
        self.quantity -= 1
        return self.quantity

    def increment_quantity(self) -> int:
        """Put one copy back on the shelf."""
        self._require_book()
        self.quantity += 1
        return self.quantity

    def _require_book(self) -> None:
        if not self.is_book:
            raise QuantityError(f"Only books carry a quantity, not {self.category.value}")

    @classmethod
    def book(
        cls,
        isbn: str,
        title: str,
        author: Optional[str] = None,
        quantity: int = 1,
        available: bool = True,
    ) -> "CatalogItem":
        """Build a book item."""
        return cls(
            item_id=isbn,
            title=title,
            category=ItemCategory.BOOK,
            creator=author,
            available=available,
            quantity=quantity,
        )

    @classmethod
    def cd(
        cls,
        catalog_number: str,
        title: str,
        artist: Optional[str] = None,
        available: bool = True,
    ) -> "CatalogItem":
        """Build a CD item."""
        return cls(
            item_id=catalog_number,
            title=title,
            category=ItemCategory.CD,
            creator=artist,
            available=available,
        )

    @classmethod
    def journal(
        cls,
        issn: str,
        title: str,
        publisher: Optional[str] = None,
        available: bool = True,
    ) -> "CatalogItem":
        """Build a journal item."""
        return cls(
            item_id=issn,
            title=title,
            category=ItemCategory.JOURNAL,
            creator=publisher,
            available=available,
        )
