"""API endpoints for Invoices module."""

from fastapi import APIRouter, Depends, Query, status

from school_office.core.config import settings
from school_office.core.store import InMemoryStore, get_store
from school_office.modules.invoices.models import InvoiceStatus
from school_office.modules.invoices.schemas import (
    InvoiceCreate,
    InvoiceFilters,
    InvoiceFromFeeStructureRequest,
    InvoiceResponse,
    InvoiceSummary,
    InvoiceUpdate,
    RecordPaymentRequest,
    StatusRefreshResult,
)
from school_office.modules.invoices.service import InvoiceService
from school_office.shared.schemas.base import ApiResponse, PaginatedResponse

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _invoice_to_response(invoice) -> InvoiceResponse:
    """Convert Invoice model to response schema."""
    return InvoiceResponse(
        id=invoice.id,
        student_id=invoice.student_id,
        student_name=invoice.student_name,
        academic_year=invoice.academic_year,
        term=invoice.term,
        total_amount=float(invoice.total_amount),
        paid_amount=float(invoice.paid_amount),
        due_amount=float(invoice.due_amount),
        due_date=invoice.due_date,
        status=invoice.status,
        created_date=invoice.created_date,
        is_active=invoice.is_active,
        items=[
            {
                "id": item.id,
                "description": item.description,
                "amount": float(item.amount),
                "category": item.category,
            }
            for item in invoice.items
        ],
    )


def _invoice_to_summary(invoice) -> InvoiceSummary:
    """Convert Invoice model to summary schema."""
    return InvoiceSummary(
        id=invoice.id,
        student_id=invoice.student_id,
        student_name=invoice.student_name,
        academic_year=invoice.academic_year,
        term=invoice.term,
        status=invoice.status,
        total_amount=float(invoice.total_amount),
        paid_amount=float(invoice.paid_amount),
        due_amount=float(invoice.due_amount),
        due_date=invoice.due_date,
        is_active=invoice.is_active,
    )


# --- Invoice CRUD ---


@router.post(
    "",
    response_model=ApiResponse[InvoiceResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    data: InvoiceCreate,
    store: InMemoryStore = Depends(get_store),
):
    """Create a pending invoice for a student."""
    service = InvoiceService(store)
    invoice = service.create_invoice(data)
    return ApiResponse(
        success=True,
        message="Invoice created successfully",
        data=_invoice_to_response(invoice),
    )


@router.post(
    "/from-fee-structure",
    response_model=ApiResponse[InvoiceResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice_from_fee_structure(
    data: InvoiceFromFeeStructureRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Create an invoice seeded with the items of a fee structure."""
    service = InvoiceService(store)
    invoice = service.create_from_fee_structure(data)
    return ApiResponse(
        success=True,
        message="Invoice created successfully",
        data=_invoice_to_response(invoice),
    )


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[InvoiceSummary]],
)
async def list_invoices(
    student_id: str | None = Query(None),
    academic_year: str | None = Query(None),
    term: str | None = Query(None),
    status: InvoiceStatus | None = Query(None),
    search: str | None = Query(None),
    include_inactive: bool = Query(False),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_limit, ge=1, le=500),
    store: InMemoryStore = Depends(get_store),
):
    """List invoices with filters."""
    service = InvoiceService(store)
    filters = InvoiceFilters(
        student_id=student_id,
        academic_year=academic_year,
        term=term,
        status=status,
        search=search,
        include_inactive=include_inactive,
        page=page,
        limit=limit,
    )
    invoices, total = service.list_invoices(filters)
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[_invoice_to_summary(inv) for inv in invoices],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get(
    "/outstanding",
    response_model=ApiResponse[list[InvoiceSummary]],
)
async def list_outstanding_invoices(
    term: str | None = Query(None),
    store: InMemoryStore = Depends(get_store),
):
    """Active invoices that are pending, overdue or partially paid."""
    service = InvoiceService(store)
    return ApiResponse(
        success=True,
        data=[_invoice_to_summary(inv) for inv in service.outstanding(term)],
    )


@router.post(
    "/refresh-statuses",
    response_model=ApiResponse[StatusRefreshResult],
)
async def refresh_invoice_statuses(
    store: InMemoryStore = Depends(get_store),
):
    """Re-derive statuses against today's date (marks unpaid past-due invoices overdue)."""
    service = InvoiceService(store)
    result = service.refresh_statuses()
    return ApiResponse(
        success=True,
        message=f"{result.invoices_updated} invoice(s) updated",
        data=result,
    )


@router.get(
    "/{invoice_id}",
    response_model=ApiResponse[InvoiceResponse],
)
async def get_invoice(
    invoice_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Get invoice by ID with all items."""
    service = InvoiceService(store)
    invoice = service.get_invoice_by_id(invoice_id)
    return ApiResponse(
        success=True,
        data=_invoice_to_response(invoice),
    )


@router.patch(
    "/{invoice_id}",
    response_model=ApiResponse[InvoiceResponse],
)
async def update_invoice(
    invoice_id: str,
    data: InvoiceUpdate,
    store: InMemoryStore = Depends(get_store),
):
    """Update invoice fields or replace its items."""
    service = InvoiceService(store)
    invoice = service.update_invoice(invoice_id, data)
    return ApiResponse(
        success=True,
        message="Invoice updated successfully",
        data=_invoice_to_response(invoice),
    )


@router.delete(
    "/{invoice_id}",
    response_model=ApiResponse[InvoiceResponse],
)
async def delete_invoice(
    invoice_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Delete an invoice (kept as inactive for history)."""
    service = InvoiceService(store)
    invoice = service.delete_invoice(invoice_id)
    return ApiResponse(
        success=True,
        message="Invoice deleted successfully",
        data=_invoice_to_response(invoice),
    )


@router.post(
    "/{invoice_id}/payment",
    response_model=ApiResponse[InvoiceResponse],
)
async def record_payment(
    invoice_id: str,
    data: RecordPaymentRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Set the amount paid and re-derive the invoice status."""
    service = InvoiceService(store)
    invoice = service.record_payment(invoice_id, data.paid_amount)
    return ApiResponse(
        success=True,
        message="Payment updated successfully",
        data=_invoice_to_response(invoice),
    )
