"""Overdue reminder fan-out.

A channel is any callable taking ``(patron, message)``. The dispatcher
decides who gets reminded and what the message says; channels decide how
the message travels.
"""

import logging
from datetime import date
from typing import Any, Callable, Optional

from ..errors import MissingDetectorError
from ..overdue.detector import OverdueDetector
from ..patrons.models import Patron

logger = logging.getLogger(__name__)

Channel = Callable[[Patron, str], Any]


def reminder_message(overdue_count: int) -> str:
    """Reminder text for the given number of overdue items."""
    if overdue_count == 1:
        return "You have 1 overdue item."
    return f"You have {overdue_count} overdue item(s)."


class NotificationDispatcher:
    """Sends overdue reminders to every attached channel."""

    def __init__(self, detector: Optional[OverdueDetector]):
        """Initialize the dispatcher.

        Args:
            detector: Source of overdue loans

        Raises:
            MissingDetectorError: If detector is None
        """
        if detector is None:
            raise MissingDetectorError("NotificationDispatcher requires an OverdueDetector")
        self.detector = detector
        self._channels: list[Channel] = []

    @property
    def channels(self) -> list[Channel]:
        return list(self._channels)

    def attach(self, channel: Optional[Channel]) -> None:
        """Add a channel; attaching one already present does nothing."""
        if channel is not None and channel not in self._channels:
            self._channels.append(channel)

    def detach(self, channel: Optional[Channel]) -> None:
        """Remove a channel; detaching an absent one does nothing."""
        if channel in self._channels:
            self._channels.remove(channel)

    def notify_observers(self, patron: Patron, message: str) -> int:
        """Deliver a message through every channel.

        A channel that raises is logged and skipped; the remaining channels
        still run.

        Returns:
            Number of channels that delivered without raising
        """
        delivered = 0
        for channel in list(self._channels):
            try:
                channel(patron, message)
            except Exception:
                logger.exception(
                    "Channel %r failed to notify patron %s", channel, patron.patron_id
                )
                continue
            delivered += 1
        return delivered

    def send_reminder_to_patron(self, patron: Optional[Patron], as_of: Optional[date]) -> bool:
        """Remind one patron about their overdue items.

        Returns:
            True if a reminder was dispatched, False if the patron has nothing
            overdue or no email address
        """
        if patron is None or as_of is None:
            return False
        count = len(self.detector.overdue_loans_for_patron(patron, as_of))
        return self._remind(patron, count)

    def send_overdue_reminders(self, as_of: Optional[date]) -> int:
        """Send one reminder to each patron with overdue items.

        Returns:
            Number of reminders sent
        """
        counts: dict[Patron, int] = {}
        for loan in self.detector.overdue_loans(as_of):
            counts[loan.patron] = counts.get(loan.patron, 0) + 1

        sent = sum(1 for patron, count in counts.items() if self._remind(patron, count))
        logger.info("Sent %d overdue reminder(s) for %s", sent, as_of)
        return sent

    def _remind(self, patron: Patron, count: int) -> bool:
        if count == 0:
            return False
        if not patron.has_contact:
            logger.warning("Patron %s has no email; reminder skipped", patron.patron_id)
            return False

        self.notify_observers(patron, reminder_message(count))
        return True
