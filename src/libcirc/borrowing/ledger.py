"""Loan ledger: borrowing, returns and fine payments."""

import logging
from datetime import date
from typing import Optional

from ..catalog.models import CatalogItem
from ..errors import OverdueItemsError, UnpaidFinesError
from ..fines.models import Fine
from ..overdue.detector import OverdueDetector
from ..patrons.models import Patron
from .models import Loan

logger = logging.getLogger(__name__)


class LoanLedger:
    """Authoritative record of loans and fines.

    The ledger owns its loan and fine lists; items and patrons are shared
    references owned by the caller. Loans are never removed. Fines are kept
    in the order they were added, which is also the order payments settle
    them.
    """

    def __init__(self, detector: Optional[OverdueDetector] = None):
        """Initialize the ledger.

        Args:
            detector: Overdue detector to consult. Defaults to one reading
                this ledger.
        """
        self._loans: list[Loan] = []
        self._fines: list[Fine] = []
        self.detector = detector if detector is not None else OverdueDetector(self)

    # -------------------------------------------------------------------------
    # Borrowing
    # -------------------------------------------------------------------------

    def borrow(
        self,
        patron: Optional[Patron],
        item: Optional[CatalogItem],
        on: Optional[date],
    ) -> Optional[Loan]:
        """Lend an item to a patron.

        Args:
            patron: Borrowing patron
            item: Item to lend
            on: Borrow date

        Returns:
            The new loan, or None if an input is missing or the item is not
            available

        Raises:
            UnpaidFinesError: If the patron has unpaid fines
            OverdueItemsError: If the patron has overdue loans as of ``on``
        """
        if patron is None or item is None or on is None:
            return None

        if not item.is_available:
            logger.warning(
                "Borrow rejected: %s %s is not available", item.category.value, item.item_id
            )
            return None

        self._check_eligibility(patron, on, item.category.label)

        loan = Loan.open(item, patron, on)
        if item.is_book:
            if item.decrement_quantity() == 0:
                item.available = False
        else:
            item.available = False

        self._loans.append(loan)
        logger.info(
            "Patron %s borrowed %s %s, due %s",
            patron.patron_id,
            item.category.value,
            item.item_id,
            loan.due_date.isoformat(),
        )
        return loan

    def _check_eligibility(self, patron: Patron, on: date, what: str) -> None:
        if self.has_unpaid_fines(patron):
            logger.warning("Borrow blocked for %s: unpaid fines", patron.patron_id)
            raise UnpaidFinesError(f"Cannot borrow {what}: patron has unpaid fines.")

        if self.has_overdue_items(patron, on):
            logger.warning("Borrow blocked for %s: overdue items", patron.patron_id)
            raise OverdueItemsError(f"Cannot borrow {what}: patron has overdue items.")

    def return_item(self, loan: Optional[Loan], on: Optional[date]) -> None:
        """Record the return of a loan.

        Inventory is restored only when an active loan is returned. Calling
        this again on a returned loan corrects its return date and leaves the
        item untouched.
        """
        if loan is None or on is None:
            return

        if loan.is_returned:
            logger.warning(
                "Loan %s already returned on %s; correcting return date to %s",
                loan.loan_id,
                loan.return_date.isoformat(),
                on.isoformat(),
            )
            loan.return_date = on
            return

        loan.return_date = on

        item = loan.item
        if item is None:
            logger.info("Legacy loan %s returned on %s", loan.loan_id, on.isoformat())
            return

        if item.is_book:
            if item.increment_quantity() > 0:
                item.available = True
        else:
            item.available = True

        logger.info(
            "Patron %s returned %s %s on %s",
            loan.patron.patron_id,
            item.category.value,
            item.item_id,
            on.isoformat(),
        )

    # -------------------------------------------------------------------------
    # Fines
    # -------------------------------------------------------------------------

    def add_fine(self, fine: Optional[Fine]) -> None:
        if fine is not None:
            self._fines.append(fine)
            logger.info("Fine of %s added for %s", fine.amount, fine.patron.patron_id)

    def charge_overdue_fine(self, loan: Optional[Loan], as_of: Optional[date]) -> Optional[Fine]:
        """Record a fine for an overdue loan.

        The amount comes from the item's fine strategy (or the legacy flat
        rate for item-less loans).

        Returns:
            The recorded fine, or None if nothing is owed
        """
        amount = self.detector.calculate_fine(loan, as_of)
        if amount <= 0:
            return None

        fine = Fine(patron=loan.patron, amount=amount, created_date=as_of)
        self.add_fine(fine)
        return fine

    def pay_fine(self, patron: Optional[Patron], amount: float) -> bool:
        """Pay towards a patron's unpaid fines, oldest first.

        Each fine is settled in full before the next one; any remainder is
        applied partially to the next fine. Overpayment is absorbed.

        Returns:
            True if a payment was applied
        """
        if patron is None or amount <= 0:
            return False

        unpaid = self.unpaid_fines(patron)
        if not unpaid:
            return False

        remaining = amount
        for fine in unpaid:
            if remaining <= 0:
                break
            if remaining >= fine.amount:
                remaining -= fine.amount
                fine.pay(fine.amount)
            else:
                fine.pay(remaining)
                remaining = 0

        logger.info(
            "Patron %s paid %s; outstanding balance %s",
            patron.patron_id,
            amount,
            self.outstanding_balance(patron),
        )
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def loans(self) -> list[Loan]:
        return list(self._loans)

    @property
    def fines(self) -> list[Fine]:
        return list(self._fines)

    def active_loans(self, patron: Optional[Patron]) -> list[Loan]:
        """Loans the patron has not returned yet."""
        if patron is None:
            return []
        return [loan for loan in self._loans if loan.patron == patron and not loan.is_returned]

    def all_loans(self, patron: Optional[Patron]) -> list[Loan]:
        """Every loan of the patron, returned or not."""
        if patron is None:
            return []
        return [loan for loan in self._loans if loan.patron == patron]

    def active_loan_for(
        self, patron: Optional[Patron], item: Optional[CatalogItem]
    ) -> Optional[Loan]:
        """Oldest active loan of ``item`` held by ``patron``."""
        if item is None:
            return None
        for loan in self.active_loans(patron):
            if loan.item == item:
                return loan
        return None

    def unpaid_fines(self, patron: Optional[Patron]) -> list[Fine]:
        if patron is None:
            return []
        return [f for f in self._fines if f.patron == patron and not f.paid]

    def has_unpaid_fines(self, patron: Optional[Patron]) -> bool:
        if patron is None:
            return False
        return any(f.patron == patron and not f.paid for f in self._fines)

    def outstanding_balance(self, patron: Optional[Patron]) -> float:
        return sum(f.amount for f in self.unpaid_fines(patron))

    def has_overdue_items(self, patron: Optional[Patron], as_of: Optional[date]) -> bool:
        if patron is None:
            return False
        return len(self.detector.overdue_loans_for_patron(patron, as_of)) > 0

    def can_borrow(self, patron: Optional[Patron], as_of: Optional[date]) -> bool:
        """Whether the patron has no unpaid fines and nothing overdue."""
        if patron is None:
            return False
        return not self.has_unpaid_fines(patron) and not self.has_overdue_items(patron, as_of)

    def is_overdue(self, loan: Optional[Loan], as_of: Optional[date]) -> bool:
        return self.detector.is_overdue(loan, as_of)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def restore(self, loans: list[Loan], fines: list[Fine]) -> None:
        """Replace the ledger contents with previously stored records.

        Used by the store when loading; item availability is taken as stored.
        """
        self._loans = list(loans)
        self._fines = list(fines)
