"""API for dashboard summary (admin main page)."""

from fastapi import APIRouter, Depends, Query

from school_office.core.store import InMemoryStore, get_store
from school_office.modules.dashboard.schemas import DashboardResponse
from school_office.modules.dashboard.service import DashboardService
from school_office.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=ApiResponse[DashboardResponse],
)
async def get_dashboard(
    academic_year: str | None = Query(
        None,
        description="Limit invoice figures to one academic year. Default: all years.",
    ),
    store: InMemoryStore = Depends(get_store),
):
    """Get dashboard summary for the admin main page."""
    service = DashboardService(store)
    data = service.get_summary(academic_year=academic_year)
    for key in ("revenue_collected", "outstanding_total", "total_invoiced"):
        data[key] = float(data[key])
    return ApiResponse(data=DashboardResponse(**data))
