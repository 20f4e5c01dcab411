"""Schemas for dashboard API (admin main page summary)."""

from school_office.shared.schemas.base import BaseSchema


class DashboardResponse(BaseSchema):
    """Summary data for main page cards."""

    # Overview cards
    active_users_count: int = 0
    active_students_count: int = 0
    pending_invoices_count: int = 0
    overdue_invoices_count: int = 0
    revenue_collected: float = 0.0
    outstanding_total: float = 0.0
    total_invoiced: float = 0.0
    collection_rate_percent: float | None = None  # 0–100, None if nothing invoiced

    # Reminders
    active_schedules_count: int = 0
    schedules_due_soon_count: int = 0
    reminders_due_count: int = 0

    # Context
    academic_year: str | None = None
    currency: str = ""
