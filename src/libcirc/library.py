"""Library facade.

Wires the catalog, patron registry, loan ledger, overdue detector and
notification dispatcher together and offers key-based shortcuts for the
command line.
"""

from datetime import date
from typing import Optional

from .borrowing.ledger import LoanLedger
from .borrowing.models import Loan
from .catalog.manager import Catalog
from .catalog.models import CatalogItem, ItemCategory
from .errors import ItemNotFoundError, LoanNotFoundError, PatronNotFoundError
from .fines.models import Fine
from .notifications.dispatcher import NotificationDispatcher
from .overdue.detector import OverdueDetector
from .overdue.schemas import OverdueReport
from .patrons.models import Patron
from .patrons.registry import PatronRegistry


class Library:
    """One circulation desk: catalog, patrons, ledger and reminders."""

    def __init__(self) -> None:
        self.catalog = Catalog()
        self.ledger = LoanLedger()
        self.detector: OverdueDetector = self.ledger.detector
        self.patrons = PatronRegistry(self.ledger)
        self.dispatcher = NotificationDispatcher(self.detector)

    # ---- lookups
    def require_patron(self, patron_id: str) -> Patron:
        patron = self.patrons.find(patron_id)
        if patron is None:
            raise PatronNotFoundError(f"No patron with ID {patron_id}")
        return patron

    def require_item(self, item_id: str, category: Optional[ItemCategory] = None) -> CatalogItem:
        item = self.catalog.get(item_id, category)
        if item is None:
            what = category.value if category is not None else "item"
            raise ItemNotFoundError(f"No {what} with ID {item_id}")
        return item

    # ---- circulation
    def borrow(
        self,
        patron_id: str,
        item_id: str,
        on: date,
        category: Optional[ItemCategory] = None,
    ) -> Optional[Loan]:
        """Borrow by keys; see ``LoanLedger.borrow`` for the rules."""
        patron = self.require_patron(patron_id)
        return self.ledger.borrow(patron, self.require_item(item_id, category), on)

    def return_item(
        self,
        patron_id: str,
        item_id: str,
        on: date,
        category: Optional[ItemCategory] = None,
    ) -> Loan:
        """Return the patron's active loan of an item."""
        patron = self.require_patron(patron_id)
        item = self.require_item(item_id, category)
        loan = self.ledger.active_loan_for(patron, item)
        if loan is None:
            raise LoanNotFoundError(f"Patron {patron_id} has no active loan of {item_id}")
        self.ledger.return_item(loan, on)
        return loan

    def charge(self, patron_id: str, amount: float, on: date) -> Fine:
        """Add a manual fine to a patron's account."""
        fine = Fine(patron=self.require_patron(patron_id), amount=amount, created_date=on)
        self.ledger.add_fine(fine)
        return fine

    def pay(self, patron_id: str, amount: float) -> bool:
        return self.ledger.pay_fine(self.require_patron(patron_id), amount)

    # ---- reporting
    def overdue_report(self, patron_id: str, as_of: date) -> OverdueReport:
        return self.detector.mixed_media_overdue_report(self.require_patron(patron_id), as_of)

    def send_reminders(self, as_of: date) -> int:
        return self.dispatcher.send_overdue_reminders(as_of)
