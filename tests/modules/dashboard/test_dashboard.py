from datetime import date
from decimal import Decimal

from httpx import AsyncClient

from school_office.core.store import InMemoryStore
from school_office.modules.dashboard.service import DashboardService
from school_office.modules.invoices.service import InvoiceService


class TestDashboardService:
    """Tests for DashboardService."""

    def test_summary_over_sample_data(self, store: InMemoryStore):
        summary = DashboardService(store).get_summary(today=date(2024, 9, 25))

        assert summary["active_users_count"] == 4
        assert summary["active_students_count"] == 3
        assert summary["pending_invoices_count"] == 2
        assert summary["overdue_invoices_count"] == 1
        assert summary["total_invoiced"] == Decimal("40000")
        assert summary["revenue_collected"] == Decimal("22000")
        assert summary["outstanding_total"] == Decimal("18000")
        assert summary["collection_rate_percent"] == 55.0
        assert summary["active_schedules_count"] == 3
        assert summary["schedules_due_soon_count"] == 1
        assert summary["reminders_due_count"] == 1

    def test_summary_for_year_without_invoices(self, store: InMemoryStore):
        summary = DashboardService(store).get_summary(academic_year="2023-24")

        assert summary["pending_invoices_count"] == 0
        assert summary["total_invoiced"] == Decimal("0")
        assert summary["collection_rate_percent"] is None
        assert summary["academic_year"] == "2023-24"

    def test_deleted_invoices_are_excluded(self, store: InMemoryStore):
        InvoiceService(store).delete_invoice("inv-003")

        summary = DashboardService(store).get_summary()

        assert summary["overdue_invoices_count"] == 0
        assert summary["total_invoiced"] == Decimal("27000")

    def test_empty_store(self, empty_store: InMemoryStore):
        summary = DashboardService(empty_store).get_summary()

        assert summary["active_users_count"] == 0
        assert summary["revenue_collected"] == Decimal("0")
        assert summary["collection_rate_percent"] is None


async def test_dashboard_endpoint(client: AsyncClient):
    res = await client.get("/api/v1/dashboard")

    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["pending_invoices_count"] == 2
    assert data["revenue_collected"] == 22000.0
    assert data["outstanding_total"] == 18000.0
    assert data["total_invoiced"] == 40000.0
    assert isinstance(data["total_invoiced"], float)
    assert data["collection_rate_percent"] == 55.0
    assert data["currency"]
