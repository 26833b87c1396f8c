"""Tests for the Catalog."""

import pytest
from pydantic import ValidationError

from libcirc.catalog.manager import Catalog
from libcirc.catalog.models import CatalogItem, ItemCategory
from libcirc.catalog.schemas import ItemCreate
from libcirc.errors import AmbiguousItemError, DuplicateItemError


@pytest.fixture
def catalog(book, cd, journal):
    c = Catalog()
    for item in (book, cd, journal):
        c.add(item)
    return c


class TestAddItems:
    """Tests for adding items."""

    def test_add(self, catalog, book):
        """Test add."""
        assert len(catalog) == 3
        assert catalog.get("ISBN123") is book
        assert "ISBN123" in catalog

    def test_duplicate_rejected(self, catalog):
        """Test duplicate rejected."""
        with pytest.raises(DuplicateItemError, match="ISBN123"):
            catalog.add(CatalogItem.book("ISBN123", "Copy"))

    def test_none_rejected(self, catalog):
        """Test None rejected."""
        with pytest.raises(ValueError):
            catalog.add(None)

    def test_blank_id_rejected(self, catalog):
        """Test blank id rejected."""
        with pytest.raises(ValueError):
            catalog.add(CatalogItem.book("  ", "Blank"))

    def test_create_from_schema(self):
        """Test creating an item from validated input."""
        catalog = Catalog()
        item = catalog.create(
            ItemCreate(item_id="ISBN7", title="Dune", category=ItemCategory.BOOK, quantity=4)
        )
        assert item.quantity == 4
        assert catalog.get("ISBN7") is item

    def test_schema_rejects_quantity_for_cd(self):
        """Test schema rejects quantity for CD."""
        with pytest.raises(ValidationError):
            ItemCreate(item_id="CD1", title="T", category=ItemCategory.CD, quantity=2)

    def test_schema_rejects_blank_title(self):
        """Test schema rejects blank title."""
        with pytest.raises(ValidationError):
            ItemCreate(item_id="CD1", title="   ", category=ItemCategory.CD)


class TestSearch:
    """Tests for catalog search."""

    def test_search_by_title_case_insensitive(self, catalog, book):
        """Test search by title case insensitive."""
        assert catalog.search_by_title("clean") == [book]

    def test_search_by_creator(self, catalog, cd):
        """Test search by creator."""
        assert catalog.search_by_creator("MILES") == [cd]

    def test_search_none(self, catalog):
        """Test search None."""
        assert catalog.search_by_title(None) == []
        assert catalog.search_by_creator(None) == []

    def test_items_by_category(self, catalog, journal):
        """Test items by category."""
        assert catalog.items(ItemCategory.JOURNAL) == [journal]
        assert len(catalog.items()) == 3

    def test_available_items(self, catalog, cd):
        """Test available items."""
        cd.available = False
        assert cd not in catalog.available_items()
        assert len(catalog.available_items()) == 2

    def test_get_missing(self, catalog):
        """Test get missing."""
        assert catalog.get("nope") is None
        assert catalog.get(None) is None


class TestSharedIds:
    """Tests for IDs reused across categories."""

    @pytest.fixture
    def shared(self):
        catalog = Catalog()
        catalog.add(CatalogItem.book("X1", "Field Guide"))
        catalog.add(CatalogItem.cd("X1", "Field Recordings"))
        return catalog

    def test_book_and_cd_share_id(self, shared):
        """Test a book and a CD with the same code are both catalogued."""
        assert len(shared) == 2
        assert "X1" in shared

    def test_duplicate_within_category(self, shared):
        """Test the same code is still unique inside one category."""
        with pytest.raises(DuplicateItemError, match="Duplicate cd ID: X1"):
            shared.add(CatalogItem.cd("X1", "Another CD"))

    def test_get_with_category(self, shared):
        """Test the category picks the right item."""
        assert shared.get("X1", ItemCategory.BOOK).title == "Field Guide"
        assert shared.get("X1", ItemCategory.CD).title == "Field Recordings"
        assert shared.get("X1", ItemCategory.JOURNAL) is None

    def test_get_without_category_is_ambiguous(self, shared):
        """Test a bare lookup of a shared code asks for a category."""
        with pytest.raises(AmbiguousItemError, match="book, cd"):
            shared.get("X1")

    def test_ambiguous_is_lookup_error(self, shared):
        """Test the ambiguity error can be caught as a LookupError."""
        with pytest.raises(LookupError):
            shared.get("X1")
