"""Borrowing: loans, returns and fine payments.

Provides functionality for:
- Borrow eligibility (unpaid fines, overdue items)
- Per-category due dates
- Book copy counts on borrow and return
- Oldest-first fine payment
"""

from .ledger import LoanLedger
from .models import LEGACY_LOAN_PERIOD_DAYS, Loan, LoanStatus

__all__ = [
    "LoanLedger",
    "Loan",
    "LoanStatus",
    "LEGACY_LOAN_PERIOD_DAYS",
]
