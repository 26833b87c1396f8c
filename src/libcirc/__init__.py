"""libcirc: circulation rules for a small library.

Decides whether a patron may borrow an item, computes due dates per media
type, detects overdue loans, calculates fines and sends reminders.
"""

__version__ = "0.1.0"

from .borrowing import Loan, LoanLedger, LoanStatus
from .catalog import Catalog, CatalogItem, ItemCategory
from .errors import (
    BorrowBlockedError,
    CirculationError,
    InvalidPaymentError,
    OverdueItemsError,
    QuantityError,
    UnknownCategoryError,
    UnpaidFinesError,
)
from .fines import Fine, FineStrategy, get_default_strategy, get_strategy
from .library import Library
from .notifications import NotificationDispatcher
from .overdue import OverdueDetector, OverdueReport
from .patrons import Patron, PatronRegistry

__all__ = [
    "__version__",
    # catalog
    "Catalog",
    "CatalogItem",
    "ItemCategory",
    # patrons
    "Patron",
    "PatronRegistry",
    # borrowing
    "Loan",
    "LoanLedger",
    "LoanStatus",
    # fines
    "Fine",
    "FineStrategy",
    "get_strategy",
    "get_default_strategy",
    # overdue
    "OverdueDetector",
    "OverdueReport",
    # notifications
    "NotificationDispatcher",
    # facade
    "Library",
    # errors
    "CirculationError",
    "BorrowBlockedError",
    "UnpaidFinesError",
    "OverdueItemsError",
    "InvalidPaymentError",
    "QuantityError",
    "UnknownCategoryError",
]
