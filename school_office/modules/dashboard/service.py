"""Service for dashboard summary (admin main page)."""

from datetime import date
from decimal import Decimal

from school_office.core.config import settings
from school_office.core.store import InMemoryStore
from school_office.modules.invoices.models import InvoiceStatus
from school_office.shared.utils.money import round_money, sum_money


class DashboardService:
    """Aggregates data for main page cards."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_summary(
        self,
        *,
        academic_year: str | None = None,
        today: date | None = None,
    ) -> dict:
        """
        Build dashboard summary over active records.

        If academic_year is given, invoice figures are limited to that year.
        """
        today = today or date.today()

        invoices = self.store.invoices.filter(
            lambda inv: inv.is_active
            and (academic_year is None or inv.academic_year == academic_year)
        )
        total_invoiced = sum_money(inv.total_amount for inv in invoices)
        revenue_collected = sum_money(inv.paid_amount for inv in invoices)
        outstanding_total = sum_money(
            inv.due_amount for inv in invoices if inv.is_outstanding
        )

        collection_rate = None
        if total_invoiced > 0:
            rate = round_money(revenue_collected / total_invoiced * Decimal("100"))
            collection_rate = float(min(rate, Decimal("100")))

        schedules = self.store.payment_schedules.filter(lambda s: s.is_active)

        return {
            "active_users_count": len(self.store.users.filter(lambda u: u.is_active)),
            "active_students_count": len(self.store.students.filter(lambda s: s.is_active)),
            "pending_invoices_count": sum(1 for inv in invoices if inv.is_outstanding),
            "overdue_invoices_count": sum(
                1 for inv in invoices if inv.status == InvoiceStatus.OVERDUE.value
            ),
            "revenue_collected": revenue_collected,
            "outstanding_total": outstanding_total,
            "total_invoiced": total_invoiced,
            "collection_rate_percent": collection_rate,
            "active_schedules_count": len(schedules),
            "schedules_due_soon_count": sum(
                1 for s in schedules if 0 <= s.days_until_due(today) <= settings.due_soon_days
            ),
            "reminders_due_count": sum(1 for inv in invoices if inv.needs_reminder),
            "academic_year": academic_year,
            "currency": settings.currency,
        }
