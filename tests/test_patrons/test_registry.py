"""Tests for Patron and PatronRegistry."""

from datetime import date

import pytest
from pydantic import ValidationError

from libcirc.fines.models import Fine
from libcirc.patrons.models import Patron
from libcirc.patrons.registry import PatronRegistry
from libcirc.patrons.schemas import PatronCreate

DAY_0 = date(2025, 1, 1)


@pytest.fixture
def registry(ledger):
    return PatronRegistry(ledger)


class TestPatron:
    """Tests for the Patron model."""

    def test_equality_by_id(self):
        """Test equality by id."""
        a = Patron("U1", "Alice", "a@example.com")
        b = Patron("U1", "Alice Smith", None)
        assert a == b
        assert hash(a) == hash(b)
        assert {a, b} == {a}

    def test_has_contact(self):
        """Test has contact."""
        assert Patron("U1", "Alice", "a@example.com").has_contact is True
        assert Patron("U1", "Alice", None).has_contact is False
        assert Patron("U1", "Alice", "  ").has_contact is False


class TestRegister:
    """Tests for registering patrons."""

    def test_register(self, registry, patron):
        """Test register."""
        assert registry.register(patron) is True
        assert registry.find("U001") is patron
        assert registry.is_registered(patron)
        assert len(registry) == 1

    def test_register_duplicate(self, registry, patron):
        """Test register duplicate."""
        registry.register(patron)
        assert registry.register(Patron("U001", "Someone else")) is False
        assert len(registry) == 1

    def test_register_none_or_blank(self, registry):
        """Test register None or blank."""
        assert registry.register(None) is False
        assert registry.register(Patron("", "No ID")) is False

    def test_create_from_schema(self, registry):
        """Test create from schema."""
        patron = registry.create(PatronCreate(patron_id="U9", name="Carol", email=""))
        assert patron is not None
        assert patron.email is None

    def test_schema_rejects_bad_email(self):
        """Test schema rejects bad email."""
        with pytest.raises(ValidationError):
            PatronCreate(patron_id="U9", name="Carol", email="not-an-email")


class TestUnregister:
    """Tests for unregistering patrons."""

    def test_unregister(self, registry, patron):
        """Test unregister."""
        registry.register(patron)
        assert registry.unregister(patron) is True
        assert registry.find("U001") is None

    def test_unregister_unknown(self, registry, patron):
        """Test unregister unknown."""
        assert registry.unregister(patron) is False
        assert registry.unregister(None) is False

    def test_blocked_by_active_loan(self, registry, ledger, patron, book):
        """Test blocked by active loan."""
        registry.register(patron)
        ledger.borrow(patron, book, DAY_0)
        assert registry.unregister(patron) is False
        assert registry.is_registered(patron)

    def test_allowed_after_return(self, registry, ledger, patron, book):
        """Test allowed after return."""
        registry.register(patron)
        loan = ledger.borrow(patron, book, DAY_0)
        ledger.return_item(loan, DAY_0)
        assert registry.unregister(patron) is True

    def test_blocked_by_unpaid_fine(self, registry, ledger, patron):
        """Test blocked by unpaid fine."""
        registry.register(patron)
        ledger.add_fine(Fine(patron=patron, amount=5, created_date=DAY_0))
        assert registry.unregister(patron) is False
