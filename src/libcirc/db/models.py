"""SQLAlchemy ORM models for the circulation snapshot.

Tables:
- items: Catalog items (books, CDs, journals), keyed by category and ID
- patrons: Registered patrons
- loans: Loan history, active and returned
- fines: Fines with remaining balance

Dates are stored as ISO strings. ``position`` keeps the ledger's insertion
order, which decides the order fines are paid in.
"""

from typing import Optional

from sqlalchemy import Boolean, Float, ForeignKey, ForeignKeyConstraint, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ItemRecord(Base):
    """Catalog item row."""

    __tablename__ = "items"

    category: Mapped[str] = mapped_column(String(20), primary_key=True)
    item_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    creator: Mapped[Optional[str]] = mapped_column(String(255))
    available: Mapped[bool] = mapped_column(Boolean, default=True)
    quantity: Mapped[Optional[int]] = mapped_column(Integer)
    position: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<ItemRecord(item_id={self.item_id}, category={self.category})>"


class PatronRecord(Base):
    """Patron row."""

    __tablename__ = "patrons"

    patron_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    # False for patrons kept only because loan or fine history refers to them
    registered: Mapped[bool] = mapped_column(Boolean, default=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<PatronRecord(patron_id={self.patron_id}, name='{self.name}')>"


class LoanRecord(Base):
    """Loan row. ``item_category`` and ``item_id`` are NULL for legacy loans."""

    __tablename__ = "loans"
    __table_args__ = (
        ForeignKeyConstraint(
            ["item_category", "item_id"],
            ["items.category", "items.item_id"],
            ondelete="SET NULL",
        ),
    )

    loan_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item_category: Mapped[Optional[str]] = mapped_column(String(20))
    item_id: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    patron_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("patrons.patron_id"), nullable=False, index=True
    )
    borrow_date: Mapped[str] = mapped_column(String(10), nullable=False)  # ISO date
    due_date: Mapped[str] = mapped_column(String(10), nullable=False)  # ISO date
    return_date: Mapped[Optional[str]] = mapped_column(String(10))  # ISO date
    position: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<LoanRecord(loan_id={self.loan_id}, item_id={self.item_id})>"


class FineRecord(Base):
    """Fine row."""

    __tablename__ = "fines"

    fine_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    patron_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("patrons.patron_id"), nullable=False, index=True
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    paid: Mapped[bool] = mapped_column(Boolean, default=False)
    created_date: Mapped[str] = mapped_column(String(10), nullable=False)  # ISO date
    position: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<FineRecord(fine_id={self.fine_id}, amount={self.amount}, paid={self.paid})>"
