"""Invoice and InvoiceItem models."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from school_office.core.store.base import Record


class FeeCategory(StrEnum):
    """Category of an invoice line or fee structure item."""

    TUITION = "tuition"
    LIBRARY = "library"
    TRANSPORT = "transport"
    ACTIVITY = "activity"
    EXAM = "exam"
    MISCELLANEOUS = "miscellaneous"


class InvoiceStatus(StrEnum):
    """Invoice status enumeration."""

    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    PENDING = "pending"


# Invoices still expecting money
OUTSTANDING_STATUSES = frozenset(
    {InvoiceStatus.PENDING, InvoiceStatus.OVERDUE, InvoiceStatus.PARTIAL}
)

# Invoices with nothing paid yet; these get payment reminders
REMINDER_STATUSES = frozenset({InvoiceStatus.PENDING, InvoiceStatus.OVERDUE})


def derive_status(
    total_amount: Decimal,
    paid_amount: Decimal,
    due_date: date,
    today: date,
) -> InvoiceStatus:
    """
    Classify an invoice from its amounts and due date.

    Full payment wins over the due date; the date only matters when nothing
    has been paid.
    """
    if paid_amount >= total_amount:
        return InvoiceStatus.PAID
    if paid_amount > 0:
        return InvoiceStatus.PARTIAL
    if due_date < today:
        return InvoiceStatus.OVERDUE
    return InvoiceStatus.PENDING


class InvoiceItem(BaseModel):
    """Line item in an invoice."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    amount: Decimal
    category: str


class Invoice(Record):
    """Invoice for one student covering one academic term."""

    student_id: str
    student_name: str
    academic_year: str
    term: str
    items: list[InvoiceItem] = Field(default_factory=list)

    # Amounts (Decimal with 2 decimal places)
    total_amount: Decimal = Decimal("0.00")  # sum of items
    paid_amount: Decimal = Decimal("0.00")
    due_amount: Decimal = Decimal("0.00")  # total_amount - paid_amount

    due_date: date
    status: str = InvoiceStatus.PENDING.value
    created_date: date = Field(default_factory=date.today)

    # Deleted invoices are deactivated, not removed
    is_active: bool = True

    @property
    def is_editable(self) -> bool:
        """Check if invoice can be edited or receive payments."""
        return self.is_active

    @property
    def is_outstanding(self) -> bool:
        return self.is_active and self.status in OUTSTANDING_STATUSES

    @property
    def needs_reminder(self) -> bool:
        return self.is_active and self.status in REMINDER_STATUSES
