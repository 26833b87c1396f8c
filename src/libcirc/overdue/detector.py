"""Overdue detection and fine calculation.

Every query takes the reference date explicitly; nothing here reads the
system clock, so results are reproducible for any date.
"""

from collections import Counter
from datetime import date
from typing import TYPE_CHECKING, Optional, Union

from ..fines.strategy import FineStrategy, get_strategy, legacy_fine_amount
from ..patrons.models import Patron
from .schemas import CategoryBreakdown, OverdueLoanSummary, OverdueReport

if TYPE_CHECKING:
    from ..borrowing.ledger import LoanLedger
    from ..borrowing.models import Loan


class OverdueDetector:
    """Read-only queries over a ledger's loans."""

    def __init__(self, ledger: "LoanLedger"):
        self.ledger = ledger

    def overdue_loans(self, as_of: Optional[date]) -> list["Loan"]:
        """All loans overdue as of the given date."""
        if self.ledger is None or as_of is None:
            return []
        return [loan for loan in self.ledger.loans if loan.is_overdue(as_of)]

    def overdue_loans_for_patron(
        self, patron: Optional[Patron], as_of: Optional[date]
    ) -> list["Loan"]:
        """Overdue loans held by one patron."""
        if patron is None or as_of is None:
            return []
        return [loan for loan in self.overdue_loans(as_of) if loan.patron == patron]

    def is_overdue(self, loan: Optional["Loan"], as_of: Optional[date]) -> bool:
        if loan is None or as_of is None:
            return False
        return loan.is_overdue(as_of)

    def days_overdue(self, loan: Optional["Loan"], as_of: Optional[date]) -> int:
        if loan is None or as_of is None:
            return 0
        return loan.days_overdue(as_of)

    def calculate_fine_with(
        self,
        loan: Optional["Loan"],
        as_of: Optional[date],
        strategy: Optional[FineStrategy],
    ) -> int:
        """Fine for a loan under an explicit strategy (0 if not overdue)."""
        if loan is None or as_of is None or strategy is None:
            return 0
        days = loan.days_overdue(as_of)
        if days <= 0:
            return 0
        return strategy.calculate_fine(days)

    def calculate_fine(
        self, loan: Optional["Loan"], as_of: Optional[date]
    ) -> Union[int, float]:
        """Fine for a loan under its item's category strategy.

        Loans without an item use the flat legacy rate.
        """
        if loan is None or as_of is None:
            return 0
        if loan.item is None:
            return legacy_fine_amount(loan.days_overdue(as_of))
        return self.calculate_fine_with(loan, as_of, get_strategy(loan.item.category))

    def mixed_media_overdue_report(
        self, patron: Optional[Patron], as_of: Optional[date]
    ) -> OverdueReport:
        """Summarize a patron's overdue loans per item category.

        Each loan is fined with its own category's strategy. Loans without
        an item cannot be categorized and are left out.
        """
        if patron is None or as_of is None:
            return OverdueReport()

        counts: Counter[str] = Counter()
        fines: Counter[str] = Counter()
        oldest = 0

        for loan in self.overdue_loans_for_patron(patron, as_of):
            if loan.item is None:
                continue
            key = loan.item.category.value
            counts[key] += 1
            fines[key] += self.calculate_fine_with(loan, as_of, get_strategy(loan.item.category))
            oldest = max(oldest, loan.days_overdue(as_of))

        return OverdueReport(
            patron_id=patron.patron_id,
            as_of=as_of,
            total_items=sum(counts.values()),
            total_fine=sum(fines.values()),
            oldest_overdue_days=oldest,
            by_category={
                key: CategoryBreakdown(count=counts[key], fine=fines[key]) for key in counts
            },
        )

    def overdue_summaries(self, as_of: Optional[date]) -> list[OverdueLoanSummary]:
        """One summary row per overdue loan, most overdue first."""
        rows = [
            OverdueLoanSummary(
                loan_id=loan.loan_id,
                patron_id=loan.patron.patron_id,
                patron_name=loan.patron.name,
                item_id=loan.item.item_id if loan.item else None,
                item_title=loan.item.title if loan.item else None,
                category=loan.item.category.value if loan.item else None,
                due_date=loan.due_date,
                days_overdue=loan.days_overdue(as_of),
                fine=self.calculate_fine(loan, as_of),
            )
            for loan in self.overdue_loans(as_of)
        ]
        return sorted(rows, key=lambda r: r.days_overdue, reverse=True)
