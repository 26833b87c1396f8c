"""Tests for the CLI interface."""

import pytest
from typer.testing import CliRunner

from libcirc.cli import app


@pytest.fixture(autouse=True)
def setup_test_db(env_db):
    """Give each test its own database file."""
    yield


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def stocked(runner: CliRunner):
    """Catalog with one CD and one book, and one registered patron."""
    runner.invoke(app, ["add-item", "CD001", "--title", "Kind of Blue", "--category", "cd"])
    runner.invoke(app, ["add-item", "ISBN123", "--title", "Clean Code", "--quantity", "2"])
    runner.invoke(app, ["register", "U001", "--name", "Alice", "--email", "alice@example.com"])
    return runner


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Circulation desk" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout

    def test_unknown_log_level(self, runner: CliRunner, monkeypatch):
        """Test an unknown log level is reported instead of crashing."""
        monkeypatch.setenv("LIBCIRC_LOG_LEVEL", "verbose")
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 1
        assert "Unknown log level: VERBOSE" in result.stdout
        assert "libcirc version" not in result.stdout


class TestCatalogCommands:
    """Tests for add-item and register."""

    def test_add_item(self, runner: CliRunner):
        """Test adding a CD."""
        result = runner.invoke(app, ["add-item", "CD001", "--title", "Kind of Blue", "-c", "cd"])
        assert result.exit_code == 0
        assert "Added cd CD001" in result.stdout

    def test_duplicate_item(self, stocked: CliRunner):
        """Test a duplicate key is reported as an error."""
        result = stocked.invoke(app, ["add-item", "CD001", "--title", "Again", "-c", "cd"])
        assert result.exit_code == 1
        assert "Duplicate cd ID" in result.stdout

    def test_quantity_on_cd_rejected(self, runner: CliRunner):
        """Test quantity on CD rejected."""
        result = runner.invoke(app, ["add-item", "CD002", "-t", "X", "-c", "cd", "-q", "2"])
        assert result.exit_code == 1

    def test_register_twice(self, stocked: CliRunner):
        """Test register twice."""
        result = stocked.invoke(app, ["register", "U001", "--name", "Alice"])
        assert result.exit_code == 1
        assert "already registered" in result.stdout


class TestCirculationCommands:
    """Tests for borrow, return, charge and pay."""

    def test_borrow(self, stocked: CliRunner):
        """Test borrowing shows the due date."""
        result = stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        assert result.exit_code == 0
        assert "due 2025-01-08" in result.stdout

    def test_borrow_unavailable(self, stocked: CliRunner):
        """Test borrow unavailable."""
        stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        result = stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-02"])
        assert result.exit_code == 1
        assert "not available" in result.stdout

    def test_borrow_unknown_patron(self, stocked: CliRunner):
        """Test borrow unknown patron."""
        result = stocked.invoke(app, ["borrow", "U999", "CD001"])
        assert result.exit_code == 1
        assert "No patron" in result.stdout

    def test_borrow_blocked_by_fine(self, stocked: CliRunner):
        """Test a patron owing money cannot borrow."""
        stocked.invoke(app, ["charge", "U001", "5", "--date", "2025-01-01"])
        result = stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        assert result.exit_code == 1
        assert "unpaid fines" in result.stdout

    def test_pay_unblocks(self, stocked: CliRunner):
        """Test pay unblocks."""
        stocked.invoke(app, ["charge", "U001", "5", "--date", "2025-01-01"])
        result = stocked.invoke(app, ["pay", "U001", "5"])
        assert result.exit_code == 0
        assert "Outstanding balance: 0" in result.stdout

        result = stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-02"])
        assert result.exit_code == 0

    def test_pay_nothing_owed(self, stocked: CliRunner):
        """Test pay nothing owed."""
        result = stocked.invoke(app, ["pay", "U001", "5"])
        assert result.exit_code == 1

    def test_late_return_suggests_fine(self, stocked: CliRunner):
        """Test returning a CD three days late suggests a fine of 60."""
        stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        result = stocked.invoke(app, ["return", "U001", "CD001", "--date", "2025-01-11"])
        assert result.exit_code == 0
        assert "3 day(s) late" in result.stdout
        assert "charge U001 60" in result.stdout

    def test_return_without_loan(self, stocked: CliRunner):
        """Test return without loan."""
        result = stocked.invoke(app, ["return", "U001", "CD001"])
        assert result.exit_code == 1
        assert "no active loan" in result.stdout

    def test_invalid_date(self, stocked: CliRunner):
        """Test invalid date."""
        result = stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "yesterday"])
        assert result.exit_code == 1
        assert "Invalid date" in result.stdout


    def test_shared_id_needs_category(self, stocked: CliRunner):
        """Test borrowing a code used by a book and a CD asks for a category."""
        stocked.invoke(app, ["add-item", "CD001", "--title", "Code Complete", "-q", "1"])

        result = stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        assert result.exit_code == 1
        assert "pass a category" in result.stdout

        result = stocked.invoke(
            app, ["borrow", "U001", "CD001", "-c", "book", "--date", "2025-01-01"]
        )
        assert result.exit_code == 0
        assert "Code Complete lent to Alice" in result.stdout


class TestOverdueCommands:
    """Tests for overdue, report and remind."""

    def test_overdue_lists_fine(self, stocked: CliRunner):
        """Test overdue lists fine."""
        stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        result = stocked.invoke(app, ["overdue", "--date", "2025-01-11"])
        assert result.exit_code == 0
        assert "60" in result.stdout

    def test_nothing_overdue(self, stocked: CliRunner):
        """Test nothing overdue."""
        result = stocked.invoke(app, ["overdue", "--date", "2025-01-11"])
        assert result.exit_code == 0
        assert "Nothing overdue" in result.stdout

    def test_report(self, stocked: CliRunner):
        """Test the per-category report totals a book and a CD."""
        stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        stocked.invoke(app, ["borrow", "U001", "ISBN123", "--date", "2025-01-01"])
        result = stocked.invoke(app, ["report", "U001", "--date", "2025-01-31"])
        assert result.exit_code == 0
        assert "480" in result.stdout

    def test_remind(self, stocked: CliRunner):
        """Test remind."""
        stocked.invoke(app, ["borrow", "U001", "CD001", "--date", "2025-01-01"])
        result = stocked.invoke(app, ["remind", "--date", "2025-01-11"])
        assert result.exit_code == 0
        assert "Sent 1 reminder(s)" in result.stdout
