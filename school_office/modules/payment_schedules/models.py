from datetime import date
from enum import StrEnum

from school_office.core.store.base import Record


class ScheduleState(StrEnum):
    """Where a payment schedule stands relative to today."""

    INACTIVE = "inactive"
    OVERDUE = "overdue"
    REMINDER_ACTIVE = "reminder_active"
    DUE_SOON = "due_soon"
    SCHEDULED = "scheduled"


class PaymentSchedule(Record):
    """Fee due date for a term, with the date reminders start going out."""

    academic_year: str
    term: str
    due_date: date
    reminder_date: date
    description: str
    is_active: bool = True

    def days_until_due(self, today: date) -> int:
        """Days left until the due date; negative once it has passed."""
        return (self.due_date - today).days

    def days_until_reminder(self, today: date) -> int:
        return (self.reminder_date - today).days

    def state(self, today: date, due_soon_days: int) -> ScheduleState:
        """Classify the schedule; checks run in order and the first match wins."""
        if not self.is_active:
            return ScheduleState.INACTIVE
        days_until_due = self.days_until_due(today)
        if days_until_due < 0:
            return ScheduleState.OVERDUE
        if self.days_until_reminder(today) <= 0 and days_until_due > 0:
            return ScheduleState.REMINDER_ACTIVE
        if days_until_due <= due_soon_days:
            return ScheduleState.DUE_SOON
        return ScheduleState.SCHEDULED
