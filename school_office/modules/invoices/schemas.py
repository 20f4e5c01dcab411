"""Schemas for Invoices module."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from school_office.modules.invoices.models import FeeCategory, InvoiceStatus
from school_office.shared.schemas import PageRequest
from school_office.shared.utils.money import MAX_DIGITS


# --- Invoice Item Schemas ---


class InvoiceItemCreate(BaseModel):
    """Schema for an invoice line. Amount sign is checked by the ledger."""

    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., max_digits=MAX_DIGITS)
    category: FeeCategory = FeeCategory.TUITION


class InvoiceItemResponse(BaseModel):
    """Schema for invoice item response."""

    id: str
    description: str
    amount: float
    category: str

    model_config = {"from_attributes": True}


# --- Invoice Schemas ---


class InvoiceCreate(BaseModel):
    """Schema for creating an invoice."""

    student_id: str = Field(..., min_length=1)
    academic_year: str = Field(..., min_length=1)
    term: str = Field(..., min_length=1)
    due_date: date
    items: list[InvoiceItemCreate] = Field(default_factory=list)


class InvoiceUpdate(BaseModel):
    """Schema for updating an invoice. Only provided fields change."""

    student_id: str | None = Field(None, min_length=1)
    academic_year: str | None = Field(None, min_length=1)
    term: str | None = Field(None, min_length=1)
    due_date: date | None = None
    items: list[InvoiceItemCreate] | None = None


class RecordPaymentRequest(BaseModel):
    """Schema for setting the amount paid against an invoice."""

    paid_amount: Decimal = Field(..., max_digits=MAX_DIGITS)


class InvoiceFromFeeStructureRequest(BaseModel):
    """Schema for seeding an invoice from a fee structure."""

    fee_structure_id: str
    student_id: str
    due_date: date
    include_optional: bool = False


class InvoiceResponse(BaseModel):
    """Schema for invoice response."""

    id: str
    student_id: str
    student_name: str
    academic_year: str
    term: str
    total_amount: float
    paid_amount: float
    due_amount: float
    due_date: date
    status: str
    created_date: date
    is_active: bool
    items: list[InvoiceItemResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class InvoiceSummary(BaseModel):
    """Brief invoice summary for lists."""

    id: str
    student_id: str
    student_name: str
    academic_year: str
    term: str
    status: str
    total_amount: float
    paid_amount: float
    due_amount: float
    due_date: date
    is_active: bool

    model_config = {"from_attributes": True}


class StatusRefreshResult(BaseModel):
    """Result of re-deriving invoice statuses against today's date."""

    invoices_checked: int
    invoices_updated: int
    updated_invoice_ids: list[str] = []


# --- Filters ---


class InvoiceFilters(PageRequest):
    """Filters for listing invoices."""

    student_id: str | None = None
    academic_year: str | None = None
    term: str | None = None
    status: InvoiceStatus | None = None
    search: str | None = None  # Search by student name, year, term or status
    include_inactive: bool = False
