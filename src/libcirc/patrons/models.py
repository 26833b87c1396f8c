"""Patron model."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(unsafe_hash=True)
class Patron:
    """A registered borrower.

    Equality and hashing use ``patron_id`` only, so two objects loaded for
    the same patron compare equal.
    """

    patron_id: str
    name: str = field(compare=False)
    email: Optional[str] = field(default=None, compare=False)

    @property
    def has_contact(self) -> bool:
        """Whether reminders can be delivered to this patron."""
        return bool(self.email and self.email.strip())
