"""Library patrons."""

from .models import Patron
from .registry import PatronRegistry
from .schemas import PatronCreate

__all__ = [
    "Patron",
    "PatronCreate",
    "PatronRegistry",
]
