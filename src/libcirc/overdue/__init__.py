"""Overdue detection and reporting."""

from .detector import OverdueDetector
from .schemas import CategoryBreakdown, OverdueLoanSummary, OverdueReport

__all__ = [
    "OverdueDetector",
    "OverdueReport",
    "CategoryBreakdown",
    "OverdueLoanSummary",
]
