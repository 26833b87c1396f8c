"""Fine strategies per item category.

Each category has a fixed daily rate and the fine is ``rate * days``.
Lookups are strict: asking for a category with no registered strategy
raises ``UnknownCategoryError``.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..catalog.models import ItemCategory
from ..errors import UnknownCategoryError

# Flat rate for loans recorded before fines depended on the item type.
LEGACY_FINE_PER_DAY = 0.5


@dataclass(frozen=True)
class FineStrategy:
    """Daily-rate fine policy for one category."""

    category: ItemCategory
    rate_per_day: int

    def calculate_fine(self, days_overdue: int) -> int:
        """Fine for the given number of overdue days (0 if not overdue)."""
        if days_overdue <= 0:
            return 0
        return self.rate_per_day * days_overdue


BOOK_FINE = FineStrategy(ItemCategory.BOOK, 10)
CD_FINE = FineStrategy(ItemCategory.CD, 20)
JOURNAL_FINE = FineStrategy(ItemCategory.JOURNAL, 15)

_STRATEGIES: dict[ItemCategory, FineStrategy] = {
    s.category: s for s in (BOOK_FINE, CD_FINE, JOURNAL_FINE)
}


def get_strategy(category: Optional[Union[ItemCategory, str]]) -> FineStrategy:
    """Look up the fine strategy for a category.

    Args:
        category: Category enum member or its value, any case ("book", "CD")

    Raises:
        UnknownCategoryError: If category is None or has no strategy
    """
    if category is None:
        raise UnknownCategoryError("Item category cannot be None")
    try:
        return _STRATEGIES[ItemCategory(category.lower())]
    except (AttributeError, ValueError, KeyError):
        raise UnknownCategoryError(f"Unknown item category: {category}") from None


def get_default_strategy() -> FineStrategy:
    """Strategy used when no category can be determined."""
    return BOOK_FINE


def legacy_fine_amount(days_overdue: int) -> float:
    """Flat-rate fine for loans that carry no item."""
    if days_overdue <= 0:
        return 0.0
    return days_overdue * LEGACY_FINE_PER_DAY
