"""Command-line interface for libcirc.

Built with Typer for commands and Rich for output. Each command loads the
library snapshot, runs one operation and saves the snapshot back.
"""

from contextlib import contextmanager
from datetime import date
from typing import Generator, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from . import __version__
from .catalog.models import ItemCategory
from .catalog.schemas import ItemCreate
from .config import configure_logging, get_config
from .db import LibraryStore, get_db
from .errors import BorrowBlockedError, CirculationError
from .fines.strategy import get_strategy
from .library import Library
from .notifications.channels import ConsoleNotifier
from .patrons.schemas import PatronCreate

app = typer.Typer(
    name="libcirc",
    help="Circulation desk for books, CDs and journals.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def parse_date(value: Optional[str]) -> date:
    """Parse a --date option; the CLI supplies today when it is omitted."""
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        print_error(f"Invalid date '{value}', expected YYYY-MM-DD")
        raise typer.Exit(1)


@contextmanager
def open_library(save: bool = True) -> Generator[Library, None, None]:
    """Load the library, yield it, and save it if the command succeeded.

    Circulation errors are reported and turned into exit code 1.
    """
    store = LibraryStore(get_db())
    library = store.load()
    try:
        yield library
    except (CirculationError, LookupError) as e:
        print_error(str(e))
        raise typer.Exit(1)
    if save:
        store.save(library)


def format_money(amount: float) -> str:
    return f"{amount:g}"


@app.callback()
def main_callback() -> None:
    """Check the configuration and set up logging."""
    config = get_config()
    errors = config.validate()
    if errors:
        for message in errors:
            print_error(message)
        raise typer.Exit(1)
    configure_logging(config.log_level)


# ============================================================================
# Catalog and Patrons
# ============================================================================


@app.command("add-item")
def add_item(
    item_id: str = typer.Argument(..., help="ISBN, catalog number or ISSN"),
    title: str = typer.Option(..., "--title", "-t", help="Item title"),
    category: ItemCategory = typer.Option(
        ItemCategory.BOOK, "--category", "-c", help="Item category"
    ),
    creator: Optional[str] = typer.Option(
        None, "--creator", "-a", help="Author, artist or publisher"
    ),
    quantity: Optional[int] = typer.Option(None, "--quantity", "-q", help="Copies (books only)"),
) -> None:
    """Add an item to the catalog."""
    try:
        data = ItemCreate(
            item_id=item_id, title=title, category=category, creator=creator, quantity=quantity
        )
    except ValidationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    with open_library() as library:
        item = library.catalog.create(data)
        print_success(f"Added {item.category.value} {item.item_id}: {item.title}")


@app.command()
def register(
    patron_id: str = typer.Argument(..., help="Patron ID"),
    name: str = typer.Option(..., "--name", "-n", help="Patron name"),
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Email for reminders"),
) -> None:
    """Register a patron."""
    try:
        data = PatronCreate(patron_id=patron_id, name=name, email=email)
    except ValidationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    with open_library() as library:
        patron = library.patrons.create(data)
        if patron is None:
            print_error(f"Patron {patron_id} is already registered")
            raise typer.Exit(1)
        print_success(f"Registered {patron.name} ({patron.patron_id})")


@app.command()
def unregister(patron_id: str = typer.Argument(..., help="Patron ID")) -> None:
    """Unregister a patron with no active loans and no unpaid fines."""
    with open_library() as library:
        patron = library.require_patron(patron_id)
        if not library.patrons.unregister(patron):
            print_error(f"Patron {patron_id} has active loans or unpaid fines")
            raise typer.Exit(1)
        print_success(f"Unregistered {patron_id}")


@app.command()
def items(
    category: Optional[ItemCategory] = typer.Option(
        None, "--category", "-c", help="Only this category"
    ),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Title contains"),
) -> None:
    """List catalog items."""
    with open_library(save=False) as library:
        found = (
            library.catalog.search_by_title(search)
            if search
            else library.catalog.items(category)
        )
        if search and category:
            found = [i for i in found if i.category == category]

        if not found:
            console.print("[dim]No items found.[/dim]")
            return

        table = Table(title="Catalog", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan")
        table.add_column("Category")
        table.add_column("Title", max_width=40)
        table.add_column("Creator", style="green", max_width=25)
        table.add_column("Copies", justify="right")
        table.add_column("Available", justify="center")

        for item in found:
            table.add_row(
                item.item_id,
                item.category.value,
                item.title,
                item.creator or "-",
                str(item.quantity) if item.is_book else "-",
                "yes" if item.is_available else "no",
            )
        console.print(table)


@app.command()
def patrons() -> None:
    """List registered patrons with their balance."""
    with open_library(save=False) as library:
        registered = library.patrons.patrons()
        if not registered:
            console.print("[dim]No patrons registered.[/dim]")
            return

        table = Table(title="Patrons", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Email", style="green")
        table.add_column("Active loans", justify="right")
        table.add_column("Owes", justify="right")

        for patron in registered:
            table.add_row(
                patron.patron_id,
                patron.name,
                patron.email or "-",
                str(len(library.ledger.active_loans(patron))),
                format_money(library.ledger.outstanding_balance(patron)),
            )
        console.print(table)


# ============================================================================
# Circulation
# ============================================================================


@app.command()
def borrow(
    patron_id: str = typer.Argument(..., help="Patron ID"),
    item_id: str = typer.Argument(..., help="Item ID"),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Borrow date (YYYY-MM-DD)"),
    category: Optional[ItemCategory] = typer.Option(
        None, "--category", "-c", help="Needed when the ID is shared across categories"
    ),
) -> None:
    """Lend an item to a patron."""
    when = parse_date(on)
    with open_library() as library:
        try:
            loan = library.borrow(patron_id, item_id, when, category)
        except BorrowBlockedError as e:
            print_error(f"Borrow blocked. {e}")
            raise typer.Exit(1)

        if loan is None:
            print_warning(f"Item {item_id} is not available")
            raise typer.Exit(1)
        print_success(f"{loan.item.title} lent to {loan.patron.name}, due {loan.due_date}")


@app.command("return")
def return_item(
    patron_id: str = typer.Argument(..., help="Patron ID"),
    item_id: str = typer.Argument(..., help="Item ID"),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Return date (YYYY-MM-DD)"),
    category: Optional[ItemCategory] = typer.Option(
        None, "--category", "-c", help="Needed when the ID is shared across categories"
    ),
) -> None:
    """Return an item."""
    when = parse_date(on)
    with open_library() as library:
        loan = library.return_item(patron_id, item_id, when, category)
        print_success(f"{loan.item.title} returned by {loan.patron.name} on {when}")

        days_late = (when - loan.due_date).days
        if days_late > 0:
            fine = get_strategy(loan.item.category).calculate_fine(days_late)
            print_warning(
                f"Returned {days_late} day(s) late; "
                f"charge {fine} with 'libcirc charge {patron_id} {fine}'"
            )


@app.command()
def loans(
    patron_id: str = typer.Argument(..., help="Patron ID"),
    all_loans: bool = typer.Option(False, "--all", "-a", help="Include returned loans"),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Reference date"),
) -> None:
    """List a patron's loans."""
    when = parse_date(on)
    with open_library(save=False) as library:
        patron = library.require_patron(patron_id)
        found = library.ledger.all_loans(patron) if all_loans else library.ledger.active_loans(patron)
        if not found:
            console.print("[dim]No loans.[/dim]")
            return

        table = Table(title=f"Loans of {patron.name}", show_header=True, header_style="bold magenta")
        table.add_column("Item", style="cyan")
        table.add_column("Title", max_width=40)
        table.add_column("Borrowed")
        table.add_column("Due")
        table.add_column("Status")

        for loan in found:
            if loan.is_returned:
                status = f"returned {loan.return_date}"
            elif loan.is_overdue(when):
                status = f"[red]overdue {loan.days_overdue(when)}d[/red]"
            else:
                status = "active"
            table.add_row(
                loan.item.item_id if loan.item else "-",
                loan.item.title if loan.item else "-",
                loan.borrow_date.isoformat(),
                loan.due_date.isoformat(),
                status,
            )
        console.print(table)


# ============================================================================
# Fines
# ============================================================================


@app.command()
def charge(
    patron_id: str = typer.Argument(..., help="Patron ID"),
    amount: float = typer.Argument(..., help="Fine amount"),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Fine date"),
) -> None:
    """Add a fine to a patron's account."""
    when = parse_date(on)
    with open_library() as library:
        fine = library.charge(patron_id, amount, when)
        print_success(f"Charged {format_money(fine.amount)} to {fine.patron.name}")


@app.command()
def pay(
    patron_id: str = typer.Argument(..., help="Patron ID"),
    amount: float = typer.Argument(..., help="Payment amount"),
) -> None:
    """Pay towards a patron's fines, oldest first."""
    with open_library() as library:
        if not library.pay(patron_id, amount):
            print_warning("Nothing to pay, or amount is not positive")
            raise typer.Exit(1)
        balance = library.ledger.outstanding_balance(library.require_patron(patron_id))
        print_success(f"Payment recorded. Outstanding balance: {format_money(balance)}")


# ============================================================================
# Overdue
# ============================================================================


@app.command()
def overdue(
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Reference date"),
) -> None:
    """List overdue loans with their fines."""
    when = parse_date(on)
    with open_library(save=False) as library:
        rows = library.detector.overdue_summaries(when)
        if not rows:
            console.print(f"[dim]Nothing overdue on {when}.[/dim]")
            return

        table = Table(title=f"Overdue on {when}", show_header=True, header_style="bold magenta")
        table.add_column("Patron", style="cyan")
        table.add_column("Item")
        table.add_column("Category")
        table.add_column("Due")
        table.add_column("Days", justify="right")
        table.add_column("Fine", justify="right", style="red")

        for row in rows:
            table.add_row(
                row.patron_name,
                row.item_title or "(legacy loan)",
                row.category or "-",
                row.due_date.isoformat(),
                str(row.days_overdue),
                format_money(row.fine),
            )
        console.print(table)


@app.command()
def report(
    patron_id: str = typer.Argument(..., help="Patron ID"),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Reference date"),
) -> None:
    """Show a patron's overdue items broken down by media type."""
    when = parse_date(on)
    with open_library(save=False) as library:
        result = library.overdue_report(patron_id, when)
        if result.is_empty:
            console.print(f"[dim]No overdue items for {patron_id} on {when}.[/dim]")
            return

        table = Table(title=f"Overdue report for {patron_id}", header_style="bold magenta")
        table.add_column("Category", style="cyan")
        table.add_column("Items", justify="right")
        table.add_column("Fine", justify="right", style="red")
        for category, breakdown in result.by_category.items():
            table.add_row(category, str(breakdown.count), str(breakdown.fine))
        table.add_row("[bold]Total[/bold]", str(result.total_items), str(result.total_fine))
        console.print(table)


@app.command()
def remind(
    on: Optional[str] = typer.Option(None, "--date", "-d", help="Reference date"),
) -> None:
    """Remind every patron with overdue items."""
    when = parse_date(on)
    with open_library(save=False) as library:
        library.dispatcher.attach(ConsoleNotifier(console, subject=get_config().reminder_subject))
        sent = library.send_reminders(when)
        print_success(f"Sent {sent} reminder(s)")


# ============================================================================
# Version Command
# ============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"libcirc version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
