"""Fines and fine policies."""

from .models import Fine
from .strategy import (
    BOOK_FINE,
    CD_FINE,
    JOURNAL_FINE,
    LEGACY_FINE_PER_DAY,
    FineStrategy,
    get_default_strategy,
    get_strategy,
    legacy_fine_amount,
)

__all__ = [
    "Fine",
    "FineStrategy",
    "BOOK_FINE",
    "CD_FINE",
    "JOURNAL_FINE",
    "LEGACY_FINE_PER_DAY",
    "get_strategy",
    "get_default_strategy",
    "legacy_fine_amount",
]
