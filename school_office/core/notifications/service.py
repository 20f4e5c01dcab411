import logging
from collections import deque
from typing import Protocol

logger = logging.getLogger(__name__)


class ReminderSender(Protocol):
    """Dispatches payment reminders for a batch of invoices."""

    def send(self, invoice_ids: list[str], *, context: str | None = None) -> int:
        """Send reminders; returns the number of invoices notified."""
        ...


class LoggingReminderSender:
    """Reminder sender that records the dispatch in the log only.

    No email or SMS gateway is wired up; callers get back the count of
    invoices that would have been notified.
    """

    def __init__(self, max_batches: int = 100):
        # Oldest batches drop off once max_batches is reached
        self.sent_batches: deque[list[str]] = deque(maxlen=max_batches)

    def send(self, invoice_ids: list[str], *, context: str | None = None) -> int:
        self.sent_batches.append(list(invoice_ids))
        logger.info(
            "Payment reminders queued for %d invoice(s)%s",
            len(invoice_ids),
            f" [{context}]" if context else "",
        )
        return len(invoice_ids)


_default_sender = LoggingReminderSender()


def get_reminder_sender() -> ReminderSender:
    """Dependency returning the configured reminder sender."""
    return _default_sender
