from datetime import date
from decimal import Decimal

from httpx import AsyncClient

from school_office.core.audit import AuditAction, AuditService
from school_office.core.store import InMemoryStore
from school_office.modules.invoices.schemas import InvoiceCreate, InvoiceItemCreate
from school_office.modules.invoices.service import InvoiceService


def _create_invoice(store: InMemoryStore):
    return InvoiceService(store).create_invoice(
        InvoiceCreate(
            student_id="s1",
            academic_year="2024-25",
            term="Term 2",
            due_date=date(2024, 12, 31),
            items=[InvoiceItemCreate(description="Tuition Fee", amount=Decimal("12000"))],
        ),
        today=date(2024, 10, 1),
    )


class TestAuditService:
    def test_log_assigns_id_and_stores_entry(self, empty_store: InMemoryStore):
        entry = AuditService(empty_store).log(
            action=AuditAction.CREATE,
            entity_type="Invoice",
            entity_id="INV-2024-000001",
            new_values={"total_amount": "100.00"},
        )
        assert entry.id.startswith("AUD-")
        assert entry.action == "CREATE"
        assert empty_store.audit_logs.all() == [entry]

    def test_list_entries_newest_first_and_filtered(self, store: InMemoryStore):
        invoice = _create_invoice(store)
        InvoiceService(store).record_payment(invoice.id, 5000, today=date(2024, 10, 1))

        entries = AuditService(store).list_entries(entity_id=invoice.id)
        assert [e.action for e in entries] == [
            AuditAction.RECORD_PAYMENT.value,
            AuditAction.CREATE.value,
        ]
        assert entries[0].old_values == {"paid_amount": "0.00", "status": "pending"}
        assert entries[0].new_values == {"paid_amount": "5000.00", "status": "partial"}

        creates = AuditService(store).list_entries(action=AuditAction.CREATE.value)
        assert [e.entity_id for e in creates] == [invoice.id]


async def test_audit_logs_endpoint(client: AsyncClient, store: InMemoryStore):
    invoice = _create_invoice(store)

    res = await client.get("/api/v1/audit-logs", params={"entity_type": "Invoice"})
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["total"] == 1
    assert data["items"][0]["entity_id"] == invoice.id
    assert data["items"][0]["action"] == "CREATE"
