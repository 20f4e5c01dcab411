from datetime import date
from decimal import Decimal

from pydantic import Field

from school_office.modules.invoices.models import FeeCategory
from school_office.shared.schemas import BaseSchema
from school_office.shared.utils.money import MAX_DIGITS


# --- Fee Item Schemas ---

class FeeItemCreate(BaseSchema):
    """Schema for a fee line. Amount sign is checked by the service."""

    category: FeeCategory = FeeCategory.TUITION
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., max_digits=MAX_DIGITS)
    is_optional: bool = False


class FeeItemResponse(BaseSchema):
    id: str
    category: str
    description: str
    amount: float
    is_optional: bool


# --- Fee Structure Schemas ---

class FeeStructureCreate(BaseSchema):
    """Schema for creating a fee structure."""

    academic_year: str = Field(..., min_length=1)
    class_name: str = Field(..., min_length=1)
    term: str = Field(..., min_length=1)
    fees: list[FeeItemCreate] = Field(default_factory=list)


class FeeStructureUpdate(BaseSchema):
    """Schema for updating a fee structure. Provided fees replace the old list."""

    academic_year: str | None = Field(None, min_length=1)
    class_name: str | None = Field(None, min_length=1)
    term: str | None = Field(None, min_length=1)
    fees: list[FeeItemCreate] | None = None


class FeeStructureCopyRequest(BaseSchema):
    """Target academic year for a copied structure."""

    academic_year: str | None = Field(None, min_length=1)


class FeeItemDraft(BaseSchema):
    category: str
    description: str
    amount: float
    is_optional: bool


class FeeStructureDraft(BaseSchema):
    """Unsaved structure returned by the copy endpoint."""

    academic_year: str
    class_name: str
    term: str
    fees: list[FeeItemDraft]


class FeeStructureResponse(BaseSchema):
    """Schema for fee structure response."""

    id: str
    academic_year: str
    class_name: str
    term: str
    fees: list[FeeItemResponse]
    total_amount: float
    mandatory_amount: float
    is_active: bool
    created_date: date


class FeeStructureFilters(BaseSchema):
    """Filters for listing fee structures."""

    academic_year: str | None = None
    search: str | None = None  # Search by class, year or term
    show_historical: bool = False
