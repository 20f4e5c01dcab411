from fastapi import APIRouter, Depends, Query

from school_office.core.store import InMemoryStore, get_store
from school_office.modules.fee_structures.schemas import (
    FeeStructureCopyRequest,
    FeeStructureCreate,
    FeeStructureDraft,
    FeeStructureFilters,
    FeeStructureResponse,
    FeeStructureUpdate,
)
from school_office.modules.fee_structures.service import FeeStructureService
from school_office.shared.schemas import SuccessResponse

router = APIRouter(prefix="/fee-structures", tags=["Fee Structures"])


def _structure_to_response(structure) -> FeeStructureResponse:
    return FeeStructureResponse(
        id=structure.id,
        academic_year=structure.academic_year,
        class_name=structure.class_name,
        term=structure.term,
        fees=[
            {
                "id": fee.id,
                "category": fee.category,
                "description": fee.description,
                "amount": float(fee.amount),
                "is_optional": fee.is_optional,
            }
            for fee in structure.fees
        ],
        total_amount=float(structure.total_amount),
        mandatory_amount=float(structure.mandatory_amount),
        is_active=structure.is_active,
        created_date=structure.created_date,
    )


@router.get("", response_model=SuccessResponse[list[FeeStructureResponse]])
async def list_fee_structures(
    academic_year: str | None = Query(None),
    search: str | None = Query(None),
    show_historical: bool = Query(False),
    store: InMemoryStore = Depends(get_store),
):
    """List fee structures. Historical (inactive) ones only with show_historical."""
    service = FeeStructureService(store)
    structures = service.list_structures(
        FeeStructureFilters(
            academic_year=academic_year,
            search=search,
            show_historical=show_historical,
        )
    )
    return SuccessResponse(data=[_structure_to_response(s) for s in structures])


@router.get("/academic-years", response_model=SuccessResponse[list[str]])
async def list_academic_years(
    store: InMemoryStore = Depends(get_store),
):
    """Academic years that have at least one fee structure."""
    service = FeeStructureService(store)
    return SuccessResponse(data=service.list_academic_years())


@router.post("", response_model=SuccessResponse[FeeStructureResponse], status_code=201)
async def create_fee_structure(
    data: FeeStructureCreate,
    store: InMemoryStore = Depends(get_store),
):
    service = FeeStructureService(store)
    structure = service.create_structure(data)
    return SuccessResponse(
        data=_structure_to_response(structure),
        message="Fee structure created successfully",
    )


@router.get("/{structure_id}", response_model=SuccessResponse[FeeStructureResponse])
async def get_fee_structure(
    structure_id: str,
    store: InMemoryStore = Depends(get_store),
):
    service = FeeStructureService(store)
    return SuccessResponse(data=_structure_to_response(service.get_structure_by_id(structure_id)))


@router.put("/{structure_id}", response_model=SuccessResponse[FeeStructureResponse])
async def update_fee_structure(
    structure_id: str,
    data: FeeStructureUpdate,
    store: InMemoryStore = Depends(get_store),
):
    service = FeeStructureService(store)
    structure = service.update_structure(structure_id, data)
    return SuccessResponse(
        data=_structure_to_response(structure),
        message="Fee structure updated successfully",
    )


@router.post("/{structure_id}/deactivate", response_model=SuccessResponse[FeeStructureResponse])
async def deactivate_fee_structure(
    structure_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Deactivate a fee structure; it remains visible as historical."""
    service = FeeStructureService(store)
    structure = service.deactivate_structure(structure_id)
    return SuccessResponse(
        data=_structure_to_response(structure),
        message="Fee structure deactivated successfully",
    )


@router.post("/{structure_id}/copy", response_model=SuccessResponse[FeeStructureDraft])
async def copy_fee_structure(
    structure_id: str,
    data: FeeStructureCopyRequest | None = None,
    store: InMemoryStore = Depends(get_store),
):
    """Return a pre-filled create payload based on an existing structure (not saved)."""
    service = FeeStructureService(store)
    payload = service.copy_structure(structure_id, data.academic_year if data else None)
    return SuccessResponse(
        data=FeeStructureDraft(
            academic_year=payload.academic_year,
            class_name=payload.class_name,
            term=payload.term,
            fees=[
                {
                    "category": fee.category.value,
                    "description": fee.description,
                    "amount": float(fee.amount),
                    "is_optional": fee.is_optional,
                }
                for fee in payload.fees
            ],
        ),
        message="Fee structure copied. Modify and save as new.",
    )
