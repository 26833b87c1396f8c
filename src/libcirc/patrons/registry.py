"""Registry of patrons allowed to borrow."""

import logging
from typing import TYPE_CHECKING, Optional

from .models import Patron
from .schemas import PatronCreate

if TYPE_CHECKING:
    from ..borrowing.ledger import LoanLedger

logger = logging.getLogger(__name__)


class PatronRegistry:
    """Registers and unregisters patrons.

    The registry consults the loan ledger so that a patron who still holds
    items or owes money cannot be removed.
    """

    def __init__(self, ledger: "LoanLedger"):
        self.ledger = ledger
        self._patrons: dict[str, Patron] = {}

    def __len__(self) -> int:
        return len(self._patrons)

    def register(self, patron: Optional[Patron]) -> bool:
        """Register a patron.

        Returns:
            True if registered, False for a missing or duplicate ID
        """
        if patron is None or not patron.patron_id or not patron.patron_id.strip():
            return False
        if patron.patron_id in self._patrons:
            logger.warning("Patron %s is already registered", patron.patron_id)
            return False

        self._patrons[patron.patron_id] = patron
        logger.info("Registered patron %s (%s)", patron.patron_id, patron.name)
        return True

    def create(self, data: PatronCreate) -> Optional[Patron]:
        """Register a patron from validated input.

        Returns:
            The new patron, or None if the ID is taken
        """
        patron = Patron(patron_id=data.patron_id, name=data.name, email=data.email)
        return patron if self.register(patron) else None

    def unregister(self, patron: Optional[Patron]) -> bool:
        """Remove a patron with no active loans and no unpaid fines."""
        if patron is None or patron.patron_id not in self._patrons:
            return False

        if self.ledger.active_loans(patron):
            logger.warning("Cannot unregister %s: active loans", patron.patron_id)
            return False
        if self.ledger.has_unpaid_fines(patron):
            logger.warning("Cannot unregister %s: unpaid fines", patron.patron_id)
            return False

        del self._patrons[patron.patron_id]
        logger.info("Unregistered patron %s", patron.patron_id)
        return True

    def find(self, patron_id: Optional[str]) -> Optional[Patron]:
        if patron_id is None:
            return None
        return self._patrons.get(patron_id)

    def is_registered(self, patron: Optional[Patron]) -> bool:
        return patron is not None and patron.patron_id in self._patrons

    def patrons(self) -> list[Patron]:
        return list(self._patrons.values())
