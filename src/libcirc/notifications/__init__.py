"""Overdue reminders and notification channels."""

from .channels import ConsoleNotifier, EmailNotifier, EmailRecord, MockEmailServer
from .dispatcher import Channel, NotificationDispatcher, reminder_message

__all__ = [
    "NotificationDispatcher",
    "Channel",
    "reminder_message",
    "MockEmailServer",
    "EmailRecord",
    "EmailNotifier",
    "ConsoleNotifier",
]
