"""Loan model."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Optional
from uuid import uuid4

from ..catalog.models import LOAN_PERIODS, CatalogItem, ItemCategory
from ..patrons.models import Patron

# Loan period applied to loans that carry no item.
LEGACY_LOAN_PERIOD_DAYS = LOAN_PERIODS[ItemCategory.BOOK]


def generate_id() -> str:
    """Generate a UUID string for record keys."""
    return str(uuid4())


class LoanStatus(str, Enum):
    """Status of a loan."""

    ACTIVE = "active"
    RETURNED = "returned"


@dataclass(eq=False)
class Loan:
    """One item borrowed by one patron.

    ``item`` is None only for legacy loans recorded before items were typed;
    such loans are still tracked for overdue status and fall back to the
    flat legacy fine.
    """

    item: Optional[CatalogItem]
    patron: Patron
    borrow_date: date
    due_date: date
    return_date: Optional[date] = None
    loan_id: str = field(default_factory=generate_id)

    @classmethod
    def open(cls, item: Optional[CatalogItem], patron: Patron, borrow_date: date) -> "Loan":
        """Create a loan due after the item's loan period."""
        period = item.loan_period_days if item is not None else LEGACY_LOAN_PERIOD_DAYS
        return cls(
            item=item,
            patron=patron,
            borrow_date=borrow_date,
            due_date=borrow_date + timedelta(days=period),
        )

    def __repr__(self) -> str:
        item_id = self.item.item_id if self.item else None
        return (
            f"<Loan(id={self.loan_id}, item={item_id}, patron={self.patron.patron_id}, "
            f"status={self.status.value})>"
        )

    @property
    def status(self) -> LoanStatus:
        return LoanStatus.RETURNED if self.return_date is not None else LoanStatus.ACTIVE

    @property
    def is_returned(self) -> bool:
        return self.return_date is not None

    @property
    def category(self) -> Optional[ItemCategory]:
        return self.item.category if self.item is not None else None

    def is_overdue(self, as_of: date) -> bool:
        """Check if loan is overdue; the due date itself is not overdue."""
        return self.return_date is None and as_of > self.due_date

    def days_overdue(self, as_of: date) -> int:
        """Days overdue (0 if not overdue)."""
        if not self.is_overdue(as_of):
            return 0
        return (as_of - self.due_date).days
