from fastapi import APIRouter, Depends, Query

from school_office.core.audit.schemas import AuditLogResponse
from school_office.core.audit.service import AuditService
from school_office.core.store import InMemoryStore, get_store
from school_office.shared.schemas import PageRequest, PaginatedResponse
from school_office.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", response_model=ApiResponse[PaginatedResponse[AuditLogResponse]])
async def list_audit_logs(
    entity_type: str | None = Query(None),
    entity_id: str | None = Query(None),
    action: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    store: InMemoryStore = Depends(get_store),
):
    """Audit trail, newest first."""
    entries = AuditService(store).list_entries(
        entity_type=entity_type, entity_id=entity_id, action=action
    )
    items, total = PageRequest(page=page, limit=limit).slice(entries)
    return ApiResponse(
        data=PaginatedResponse.create(
            items=[AuditLogResponse.model_validate(e) for e in items],
            total=total,
            page=page,
            limit=limit,
        )
    )
