"""Exceptions raised by the circulation core.

Routine bad input (a missing patron, item or date) is not an error: those
operations return ``None``, ``False`` or an empty list. The exceptions here
cover business-rule violations and programming errors.
"""


class CirculationError(Exception):
    """Base class for circulation errors."""


class BorrowBlockedError(CirculationError):
    """Borrowing refused because of the patron's account state."""


class UnpaidFinesError(BorrowBlockedError):
    """Patron still owes money."""


class OverdueItemsError(BorrowBlockedError):
    """Patron holds at least one overdue loan."""


class InvalidPaymentError(CirculationError, ValueError):
    """Negative payment or negative fine amount."""


class QuantityError(CirculationError):
    """Book quantity would go negative, or quantity used on a non-book."""


class UnknownCategoryError(CirculationError, ValueError):
    """No fine strategy is registered for the category."""


class DuplicateItemError(CirculationError, ValueError):
    """An item with the same key is already catalogued."""


class PatronNotFoundError(CirculationError, LookupError):
    """No patron registered under the given ID."""


class ItemNotFoundError(CirculationError, LookupError):
    """No catalog item under the given key."""


class LoanNotFoundError(CirculationError, LookupError):
    """No active loan matches the patron and item."""


class AmbiguousItemError(CirculationError, LookupError):
    """The item ID is used by more than one category; a category is required."""


class MissingDetectorError(CirculationError, ValueError):
    """A component that reads overdue loans was built without a detector."""
