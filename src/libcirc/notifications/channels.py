"""Notification channels.

``MockEmailServer`` records outgoing mail instead of sending it;
``EmailNotifier`` adapts it to the dispatcher's channel signature.
``ConsoleNotifier`` prints reminders for the command line.
"""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from ..patrons.models import Patron


@dataclass(frozen=True)
class EmailRecord:
    """An email captured by the mock server."""

    to: str
    subject: str
    message: str


class MockEmailServer:
    """Email server that only records what it is asked to send."""

    def __init__(self) -> None:
        self._sent: list[EmailRecord] = []

    def send_email(
        self, to: Optional[str], subject: Optional[str], message: Optional[str]
    ) -> bool:
        """Record an email. Returns False if any part is missing."""
        if to is None or subject is None or message is None:
            return False
        self._sent.append(EmailRecord(to=to, subject=subject, message=message))
        return True

    @property
    def sent_emails(self) -> list[EmailRecord]:
        return list(self._sent)

    @property
    def sent_count(self) -> int:
        return len(self._sent)

    def clear(self) -> None:
        self._sent.clear()


class EmailNotifier:
    """Channel that emails the patron through an email server."""

    def __init__(self, server: MockEmailServer, subject: str = "Overdue items reminder"):
        self.server = server
        self.subject = subject

    def __call__(self, patron: Patron, message: str) -> bool:
        return self.server.send_email(patron.email, self.subject, message)

    def __repr__(self) -> str:
        return f"<EmailNotifier(subject='{self.subject}')>"


class ConsoleNotifier:
    """Channel that prints reminders with Rich."""

    def __init__(self, console: Optional[Console] = None, subject: str = "Reminder"):
        self.console = console or Console()
        self.subject = subject

    def __call__(self, patron: Patron, message: str) -> bool:
        self.console.print(
            f"[bold yellow]{self.subject}[/bold yellow] to {patron.name} <{patron.email}>: {message}"
        )
        return True

    def __repr__(self) -> str:
        return "<ConsoleNotifier>"
