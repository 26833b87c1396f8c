"""Snapshot persistence for a Library.

The core works on in-memory objects; the store loads them before a command
and writes them back afterwards. ``save`` replaces the stored snapshot in a
single transaction.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import delete, select

from ..borrowing.models import Loan
from ..catalog.models import CatalogItem, ItemCategory
from ..fines.models import Fine
from ..library import Library
from ..patrons.models import Patron
from .models import FineRecord, ItemRecord, LoanRecord, PatronRecord
from .sqlite import Database, get_db

logger = logging.getLogger(__name__)


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


class LibraryStore:
    """Loads and saves the full circulation state."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize the store.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    def load(self) -> Library:
        """Build a Library from the stored snapshot."""
        library = Library()

        with self.db.get_session() as session:
            item_rows = session.execute(
                select(ItemRecord).order_by(ItemRecord.position)
            ).scalars().all()
            patron_rows = session.execute(
                select(PatronRecord).order_by(PatronRecord.position)
            ).scalars().all()
            loan_rows = session.execute(
                select(LoanRecord).order_by(LoanRecord.position)
            ).scalars().all()
            fine_rows = session.execute(
                select(FineRecord).order_by(FineRecord.position)
            ).scalars().all()

            items: dict[tuple[ItemCategory, str], CatalogItem] = {}
            for row in item_rows:
                item = CatalogItem(
                    item_id=row.item_id,
                    title=row.title,
                    category=row.category,
                    creator=row.creator,
                    available=row.available,
                    quantity=row.quantity,
                )
                items[(item.category, item.item_id)] = library.catalog.add(item)

            patrons: dict[str, Patron] = {}
            for row in patron_rows:
                patron = Patron(patron_id=row.patron_id, name=row.name, email=row.email)
                patrons[patron.patron_id] = patron
                if row.registered:
                    library.patrons.register(patron)

            loans = [
                Loan(
                    item=(
                        items.get((ItemCategory(row.item_category), row.item_id))
                        if row.item_id
                        else None
                    ),
                    patron=patrons[row.patron_id],
                    borrow_date=_date(row.borrow_date),
                    due_date=_date(row.due_date),
                    return_date=_date(row.return_date),
                    loan_id=row.loan_id,
                )
                for row in loan_rows
            ]
            fines = [
                Fine(
                    patron=patrons[row.patron_id],
                    amount=row.amount,
                    created_date=_date(row.created_date),
                    fine_id=row.fine_id,
                )
                for row in fine_rows
            ]

        library.ledger.restore(loans, fines)
        logger.info(
            "Loaded %d item(s), %d patron(s), %d loan(s), %d fine(s)",
            len(items),
            len(patrons),
            len(loans),
            len(fines),
        )
        return library

    def save(self, library: Library) -> None:
        """Replace the stored snapshot with the library's current state."""
        loans = library.ledger.loans
        fines = library.ledger.fines

        # Patrons no longer registered but still referenced by history
        patrons: dict[str, tuple[Patron, bool]] = {
            p.patron_id: (p, True) for p in library.patrons.patrons()
        }
        for record in [*loans, *fines]:
            patrons.setdefault(record.patron.patron_id, (record.patron, False))

        with self.db.get_session() as session:
            for model in (FineRecord, LoanRecord, PatronRecord, ItemRecord):
                session.execute(delete(model))

            session.add_all(
                ItemRecord(
                    item_id=item.item_id,
                    category=item.category.value,
                    title=item.title,
                    creator=item.creator,
                    available=item.available,
                    quantity=item.quantity,
                    position=position,
                )
                for position, item in enumerate(library.catalog.items())
            )
            session.add_all(
                PatronRecord(
                    patron_id=patron.patron_id,
                    name=patron.name,
                    email=patron.email,
                    registered=registered,
                    position=position,
                )
                for position, (patron, registered) in enumerate(patrons.values())
            )
            session.flush()

            session.add_all(
                LoanRecord(
                    loan_id=loan.loan_id,
                    item_category=loan.item.category.value if loan.item else None,
                    item_id=loan.item.item_id if loan.item else None,
                    patron_id=loan.patron.patron_id,
                    borrow_date=_iso(loan.borrow_date),
                    due_date=_iso(loan.due_date),
                    return_date=_iso(loan.return_date),
                    position=position,
                )
                for position, loan in enumerate(loans)
            )
            session.add_all(
                FineRecord(
                    fine_id=fine.fine_id,
                    patron_id=fine.patron.patron_id,
                    amount=fine.amount,
                    paid=fine.paid,
                    created_date=_iso(fine.created_date),
                    position=position,
                )
                for position, fine in enumerate(fines)
            )

        logger.info("Saved %d loan(s) and %d fine(s)", len(loans), len(fines))
