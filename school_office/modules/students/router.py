"""API endpoints for Students module."""

from fastapi import APIRouter, Depends, Query, status

from school_office.core.config import settings
from school_office.core.store import InMemoryStore, get_store
from school_office.modules.invoices.router import _invoice_to_summary
from school_office.modules.invoices.schemas import InvoiceSummary
from school_office.modules.invoices.service import InvoiceService
from school_office.modules.students.models import StudentStatus
from school_office.modules.students.schemas import (
    StudentCreate,
    StudentFilters,
    StudentResponse,
    StudentUpdate,
)
from school_office.modules.students.service import StudentService
from school_office.shared.schemas.base import ApiResponse, PaginatedResponse

router = APIRouter(prefix="/students", tags=["Students"])


def _student_to_response(student, store: InMemoryStore) -> StudentResponse:
    """Helper to convert Student to response."""
    parent = store.users.find(student.parent_id)
    return StudentResponse(
        id=student.id,
        name=student.name,
        email=student.email,
        class_name=student.class_name,
        section=student.section,
        roll_number=student.roll_number,
        parent_id=student.parent_id,
        parent_name=parent.name if parent else None,
        academic_year=student.academic_year,
        date_of_birth=student.date_of_birth,
        status=student.status,
    )


@router.post(
    "",
    response_model=ApiResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_student(
    data: StudentCreate,
    store: InMemoryStore = Depends(get_store),
):
    """Create a new student and link them to their parent."""
    service = StudentService(store)
    student = service.create_student(data)
    return ApiResponse(
        success=True,
        message="Student created successfully",
        data=_student_to_response(student, store),
    )


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[StudentResponse]],
)
async def list_students(
    status: StudentStatus | None = Query(None),
    class_name: str | None = Query(None),
    parent_id: str | None = Query(None),
    search: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_limit, ge=1, le=500),
    store: InMemoryStore = Depends(get_store),
):
    """List students with filters."""
    service = StudentService(store)
    filters = StudentFilters(
        status=status,
        class_name=class_name,
        parent_id=parent_id,
        search=search,
        page=page,
        limit=limit,
    )
    students, total = service.list_students(filters)
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[_student_to_response(s, store) for s in students],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
)
async def get_student(
    student_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Get student by ID."""
    service = StudentService(store)
    student = service.get_student_by_id(student_id)
    return ApiResponse(
        success=True,
        data=_student_to_response(student, store),
    )


@router.get(
    "/{student_id}/invoices",
    response_model=ApiResponse[list[InvoiceSummary]],
)
async def list_student_invoices(
    student_id: str,
    include_inactive: bool = Query(False),
    store: InMemoryStore = Depends(get_store),
):
    """All invoices billed to a student."""
    StudentService(store).get_student_by_id(student_id)
    invoices = InvoiceService(store).list_for_student(
        student_id, include_inactive=include_inactive
    )
    return ApiResponse(
        success=True,
        data=[_invoice_to_summary(inv) for inv in invoices],
    )


@router.patch(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
)
async def update_student(
    student_id: str,
    data: StudentUpdate,
    store: InMemoryStore = Depends(get_store),
):
    """Update a student."""
    service = StudentService(store)
    student = service.update_student(student_id, data)
    return ApiResponse(
        success=True,
        message="Student updated successfully",
        data=_student_to_response(student, store),
    )


@router.post(
    "/{student_id}/deactivate",
    response_model=ApiResponse[StudentResponse],
)
async def deactivate_student(
    student_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Deactivate a student."""
    service = StudentService(store)
    student = service.deactivate_student(student_id)
    return ApiResponse(
        success=True,
        message="Student deactivated successfully",
        data=_student_to_response(student, store),
    )


@router.post(
    "/{student_id}/activate",
    response_model=ApiResponse[StudentResponse],
)
async def activate_student(
    student_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Re-activate a student."""
    service = StudentService(store)
    student = service.activate_student(student_id)
    return ApiResponse(
        success=True,
        message="Student activated successfully",
        data=_student_to_response(student, store),
    )
