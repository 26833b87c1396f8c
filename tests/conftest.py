"""Pytest configuration and shared fixtures.

This module provides fixtures for testing libcirc: patrons, one item of each
media type, a ledger with its detector and dispatcher, and databases.
"""

import os
from typing import Generator

import pytest

from libcirc.borrowing.ledger import LoanLedger
from libcirc.catalog.models import CatalogItem
from libcirc.config import reset_config
from libcirc.db.sqlite import Database, reset_db
from libcirc.library import Library
from libcirc.notifications.channels import EmailNotifier, MockEmailServer
from libcirc.notifications.dispatcher import NotificationDispatcher
from libcirc.overdue.detector import OverdueDetector
from libcirc.patrons.models import Patron

# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def patron() -> Patron:
    return Patron(patron_id="U001", name="Alice Reader", email="alice@example.com")


@pytest.fixture
def other_patron() -> Patron:
    return Patron(patron_id="U002", name="Bob Listener", email="bob@example.com")


@pytest.fixture
def book() -> CatalogItem:
    """Book with three copies."""
    return CatalogItem.book("ISBN123", "Clean Code", author="Robert Martin", quantity=3)


@pytest.fixture
def single_copy_book() -> CatalogItem:
    return CatalogItem.book("ISBN999", "Rare Atlas", author="Cartographer", quantity=1)


@pytest.fixture
def cd() -> CatalogItem:
    return CatalogItem.cd("CD001", "Kind of Blue", artist="Miles Davis")


@pytest.fixture
def journal() -> CatalogItem:
    return CatalogItem.journal("ISSN-0001", "Nature", publisher="Springer")


@pytest.fixture
def ledger() -> LoanLedger:
    return LoanLedger()


@pytest.fixture
def detector(ledger: LoanLedger) -> OverdueDetector:
    return ledger.detector


@pytest.fixture
def email_server() -> MockEmailServer:
    return MockEmailServer()


@pytest.fixture
def dispatcher(detector: OverdueDetector, email_server: MockEmailServer) -> NotificationDispatcher:
    """Dispatcher with one email channel attached."""
    d = NotificationDispatcher(detector)
    d.attach(EmailNotifier(email_server))
    return d


@pytest.fixture
def library(patron: Patron, book: CatalogItem, cd: CatalogItem, journal: CatalogItem) -> Library:
    """Library with one patron and one item of each category."""
    lib = Library()
    lib.patrons.register(patron)
    for item in (book, cd, journal):
        lib.catalog.add(item)
    return lib


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture
def env_db(tmp_path) -> Generator[str, None, None]:
    """Point LIBCIRC_DB_PATH at a temporary file for the global database."""
    reset_db()
    reset_config()

    db_path = str(tmp_path / "circulation.db")
    os.environ["LIBCIRC_DB_PATH"] = db_path

    yield db_path

    reset_db()
    reset_config()
    os.environ.pop("LIBCIRC_DB_PATH", None)
