"""Catalog of circulating media.

Provides functionality for:
- Book, CD and journal items with per-category loan periods
- Book copy counts
- Cataloguing and searching items
"""

from .manager import Catalog
from .models import LOAN_PERIODS, CatalogItem, ItemCategory
from .schemas import ItemCreate

__all__ = [
    "Catalog",
    "CatalogItem",
    "ItemCategory",
    "ItemCreate",
    "LOAN_PERIODS",
]
