from school_office.core.notifications.service import (
    LoggingReminderSender,
    ReminderSender,
    get_reminder_sender,
)

__all__ = ["LoggingReminderSender", "ReminderSender", "get_reminder_sender"]
