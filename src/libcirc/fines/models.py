"""Fine model."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from ..errors import InvalidPaymentError
from ..patrons.models import Patron


def generate_id() -> str:
    """Generate a UUID string for record keys."""
    return str(uuid4())


@dataclass(eq=False)
class Fine:
    """Money owed by a patron.

    ``amount`` is the remaining balance. ``paid`` mirrors ``amount == 0`` and
    is only changed by ``pay``.
    """

    patron: Patron
    amount: float
    created_date: date
    fine_id: str = field(default_factory=generate_id)
    paid: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise InvalidPaymentError(f"Fine amount cannot be negative: {self.amount}")
        self.paid = self.amount == 0

    def __repr__(self) -> str:
        return f"<Fine(patron={self.patron.patron_id}, amount={self.amount}, paid={self.paid})>"

    @property
    def remaining_balance(self) -> float:
        return self.amount

    def pay(self, payment: float) -> float:
        """Apply a payment to this fine.

        Args:
            payment: Amount paid, must not be negative

        Returns:
            Remaining balance after the payment

        Raises:
            InvalidPaymentError: If payment is negative
        """
        if payment < 0:
            raise InvalidPaymentError("Payment amount cannot be negative")

        self.amount -= payment
        if self.amount <= 0:
            self.amount = 0
            self.paid = True

        return self.amount
