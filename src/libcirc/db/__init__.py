"""Database module for the local SQLite snapshot."""

from .models import Base, FineRecord, ItemRecord, LoanRecord, PatronRecord
from .sqlite import Database, get_db, reset_db
from .store import LibraryStore

__all__ = [
    "Base",
    "ItemRecord",
    "PatronRecord",
    "LoanRecord",
    "FineRecord",
    "Database",
    "get_db",
    "reset_db",
    "LibraryStore",
]
