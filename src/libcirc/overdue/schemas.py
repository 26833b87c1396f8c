"""Pydantic schemas for overdue reporting."""

from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, Field


class CategoryBreakdown(BaseModel):
    """Overdue count and fine for one item category."""

    count: int = 0
    fine: int = 0


class OverdueReport(BaseModel):
    """Overdue loans of one patron across media types."""

    patron_id: Optional[str] = None
    as_of: Optional[date] = None
    total_items: int = 0
    total_fine: int = 0
    oldest_overdue_days: int = 0
    by_category: dict[str, CategoryBreakdown] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0


class OverdueLoanSummary(BaseModel):
    """One overdue loan, for listings."""

    loan_id: str
    patron_id: str
    patron_name: str
    item_id: Optional[str]
    item_title: Optional[str]
    category: Optional[str]
    due_date: date
    days_overdue: int
    fine: Union[int, float]
