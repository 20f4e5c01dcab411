from datetime import date

import pytest
from httpx import AsyncClient

from school_office.core.exceptions import NotFoundError, ValidationError
from school_office.core.notifications import LoggingReminderSender
from school_office.core.store import InMemoryStore
from school_office.modules.payment_schedules.models import PaymentSchedule, ScheduleState
from school_office.modules.payment_schedules.schemas import (
    PaymentScheduleCreate,
    PaymentScheduleFilters,
    PaymentScheduleUpdate,
)
from school_office.modules.payment_schedules.service import PaymentScheduleService


def _schedule(**overrides) -> PaymentSchedule:
    data = {
        "id": "sch",
        "academic_year": "2024-25",
        "term": "Term 1",
        "due_date": date(2024, 9, 30),
        "reminder_date": date(2024, 9, 15),
        "description": "First Term Fee Payment",
    }
    data.update(overrides)
    return PaymentSchedule(**data)


class TestScheduleState:
    """Schedule classification against a given day (due soon = 7 days)."""

    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2024, 10, 1), ScheduleState.OVERDUE),
            (date(2024, 9, 20), ScheduleState.REMINDER_ACTIVE),
            (date(2024, 9, 15), ScheduleState.REMINDER_ACTIVE),
            (date(2024, 9, 30), ScheduleState.DUE_SOON),
            (date(2024, 9, 1), ScheduleState.SCHEDULED),
        ],
    )
    def test_state(self, today, expected):
        assert _schedule().state(today, due_soon_days=7) == expected

    def test_due_soon_before_reminder(self):
        schedule = _schedule(due_date=date(2024, 9, 10), reminder_date=date(2024, 9, 10))
        assert schedule.state(date(2024, 9, 5), due_soon_days=7) == ScheduleState.DUE_SOON

    def test_inactive_wins(self):
        schedule = _schedule(is_active=False)
        assert schedule.state(date(2024, 10, 1), due_soon_days=7) == ScheduleState.INACTIVE

    def test_countdowns(self):
        schedule = _schedule()
        assert schedule.days_until_due(date(2024, 9, 25)) == 5
        assert schedule.days_until_reminder(date(2024, 9, 25)) == -10


class TestPaymentScheduleService:
    """Tests for PaymentScheduleService."""

    def test_create_schedule(self, store: InMemoryStore):
        schedule = PaymentScheduleService(store).create_schedule(
            PaymentScheduleCreate(
                academic_year="2025-26",
                term="Term 1",
                due_date=date(2025, 9, 30),
                reminder_date=date(2025, 9, 30),
                description="  First Term Fee Payment ",
            )
        )

        assert schedule.id.startswith("SCH-")
        assert schedule.description == "First Term Fee Payment"
        assert schedule.is_active

    def test_create_reminder_after_due_rejected(self, store: InMemoryStore):
        before = len(store.payment_schedules)
        with pytest.raises(ValidationError) as exc:
            PaymentScheduleService(store).create_schedule(
                PaymentScheduleCreate(
                    academic_year="2025-26",
                    term="Term 1",
                    due_date=date(2025, 9, 30),
                    reminder_date=date(2025, 10, 1),
                    description="First Term Fee Payment",
                )
            )
        assert exc.value.details["field"] == "reminder_date"
        assert len(store.payment_schedules) == before

    def test_update_checks_dates_against_stored_values(self, store: InMemoryStore):
        service = PaymentScheduleService(store)
        with pytest.raises(ValidationError):
            service.update_schedule(
                "schedule-1", PaymentScheduleUpdate(reminder_date=date(2024, 10, 5))
            )
        assert service.get_schedule_by_id("schedule-1").reminder_date == date(2024, 9, 15)

        updated = service.update_schedule(
            "schedule-1", PaymentScheduleUpdate(due_date=date(2024, 10, 15))
        )
        assert updated.due_date == date(2024, 10, 15)

    def test_deactivated_schedule_remains_historical(self, store: InMemoryStore):
        service = PaymentScheduleService(store)

        assert service.deactivate_schedule("schedule-2").is_active is False

        current = service.list_schedules(PaymentScheduleFilters())
        assert "schedule-2" not in {s.id for s in current}
        historical = service.list_schedules(PaymentScheduleFilters(show_historical=True))
        assert "schedule-2" in {s.id for s in historical}

        with pytest.raises(ValidationError):
            service.deactivate_schedule("schedule-2")

    def test_toggle_active(self, store: InMemoryStore):
        service = PaymentScheduleService(store)
        assert service.toggle_active("schedule-3").is_active is False
        assert service.toggle_active("schedule-3").is_active is True

    def test_pending_payments_count(self, store: InMemoryStore):
        service = PaymentScheduleService(store)
        assert service.pending_payments_count(service.get_schedule_by_id("schedule-1")) == 2
        assert service.pending_payments_count(service.get_schedule_by_id("schedule-2")) == 0

    def test_send_reminders_does_not_touch_invoices(self, store: InMemoryStore):
        sender = LoggingReminderSender()
        invoices_before = store.invoices.all()

        result = PaymentScheduleService(store).send_reminders("schedule-1", sender)

        assert result.invoices_notified == 1
        assert result.invoice_ids == ["inv-003"]
        assert list(sender.sent_batches) == [["inv-003"]]
        assert store.invoices.all() == invoices_before
        assert store.audit_logs.all()[-1].action == "SEND_REMINDERS"

    def test_reminders_skip_same_term_of_other_academic_year(self, store: InMemoryStore):
        old = store.invoices.get("inv-003").model_copy(
            update={"id": "inv-old", "academic_year": "2023-24"}
        )
        store.invoices.add(old)
        service = PaymentScheduleService(store)
        sender = LoggingReminderSender()

        result = service.send_reminders("schedule-1", sender)

        assert result.invoice_ids == ["inv-003"]
        assert service.pending_payments_count(service.get_schedule_by_id("schedule-1")) == 2

    def test_send_reminders_inactive_schedule(self, store: InMemoryStore):
        service = PaymentScheduleService(store)
        service.deactivate_schedule("schedule-1")
        with pytest.raises(ValidationError):
            service.send_reminders("schedule-1", LoggingReminderSender())

    def test_summary(self, store: InMemoryStore):
        summary = PaymentScheduleService(store).get_summary(today=date(2024, 9, 25))

        assert summary.active_schedules == 3
        assert summary.due_soon == 1
        assert summary.outstanding_invoices == 2

    def test_get_unknown_schedule(self, store: InMemoryStore):
        with pytest.raises(NotFoundError):
            PaymentScheduleService(store).get_schedule_by_id("missing")


async def test_list_payment_schedules_endpoint(client: AsyncClient):
    res = await client.get("/api/v1/payment-schedules")

    assert res.status_code == 200
    data = res.json()["data"]
    assert [s["id"] for s in data] == ["schedule-1", "schedule-2", "schedule-3"]
    first = data[0]
    assert first["pending_payments"] == 2
    assert first["state"] in {state.value for state in ScheduleState}


async def test_create_payment_schedule_endpoint_rejects_late_reminder(client: AsyncClient):
    res = await client.post(
        "/api/v1/payment-schedules",
        json={
            "academic_year": "2025-26",
            "term": "Term 1",
            "due_date": "2025-09-30",
            "reminder_date": "2025-10-15",
            "description": "First Term Fee Payment",
        },
    )

    assert res.status_code == 422
    assert res.json()["errors"][0]["field"] == "reminder_date"


async def test_send_reminders_endpoint(
    client: AsyncClient, reminder_sender: LoggingReminderSender
):
    res = await client.post("/api/v1/payment-schedules/schedule-1/send-reminders")

    assert res.status_code == 200, res.text
    assert res.json()["data"]["invoices_notified"] == 1
    assert list(reminder_sender.sent_batches) == [["inv-003"]]


async def test_deactivate_payment_schedule_endpoint(client: AsyncClient):
    res = await client.post("/api/v1/payment-schedules/schedule-3/deactivate")

    assert res.status_code == 200
    assert res.json()["data"]["state"] == "inactive"

    res = await client.get("/api/v1/payment-schedules", params={"show_historical": True})
    assert "schedule-3" in {s["id"] for s in res.json()["data"]}
