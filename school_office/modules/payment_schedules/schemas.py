from datetime import date

from pydantic import Field

from school_office.shared.schemas import BaseSchema


class PaymentScheduleCreate(BaseSchema):
    """Schema for creating a payment schedule."""

    academic_year: str = Field(..., min_length=1)
    term: str = Field(..., min_length=1)
    due_date: date
    reminder_date: date
    description: str = Field(..., min_length=1, max_length=255)


class PaymentScheduleUpdate(BaseSchema):
    """Schema for updating a payment schedule."""

    academic_year: str | None = Field(None, min_length=1)
    term: str | None = Field(None, min_length=1)
    due_date: date | None = None
    reminder_date: date | None = None
    description: str | None = Field(None, min_length=1, max_length=255)


class PaymentScheduleResponse(BaseSchema):
    """Schema for payment schedule response, with countdowns against today."""

    id: str
    academic_year: str
    term: str
    due_date: date
    reminder_date: date
    description: str
    is_active: bool
    days_until_due: int
    days_until_reminder: int
    state: str
    pending_payments: int


class PaymentScheduleFilters(BaseSchema):
    academic_year: str | None = None
    search: str | None = None  # Search by term, description or year
    show_historical: bool = False


class ReminderDispatchResult(BaseSchema):
    """Outcome of a (simulated) reminder run for one schedule."""

    schedule_id: str
    academic_year: str
    term: str
    invoices_notified: int
    invoice_ids: list[str] = []


class PaymentScheduleSummary(BaseSchema):
    active_schedules: int
    due_soon: int
    outstanding_invoices: int
