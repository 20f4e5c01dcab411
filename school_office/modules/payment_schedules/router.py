from datetime import date

from fastapi import APIRouter, Depends, Query

from school_office.core.notifications import ReminderSender, get_reminder_sender
from school_office.core.store import InMemoryStore, get_store
from school_office.modules.payment_schedules.schemas import (
    PaymentScheduleCreate,
    PaymentScheduleFilters,
    PaymentScheduleResponse,
    PaymentScheduleSummary,
    PaymentScheduleUpdate,
    ReminderDispatchResult,
)
from school_office.modules.payment_schedules.service import PaymentScheduleService
from school_office.shared.schemas import SuccessResponse

router = APIRouter(prefix="/payment-schedules", tags=["Payment Schedules"])


def _schedule_to_response(
    schedule, service: PaymentScheduleService, today: date | None = None
) -> PaymentScheduleResponse:
    today = today or date.today()
    return PaymentScheduleResponse(
        id=schedule.id,
        academic_year=schedule.academic_year,
        term=schedule.term,
        due_date=schedule.due_date,
        reminder_date=schedule.reminder_date,
        description=schedule.description,
        is_active=schedule.is_active,
        days_until_due=schedule.days_until_due(today),
        days_until_reminder=schedule.days_until_reminder(today),
        state=service.state_of(schedule, today).value,
        pending_payments=service.pending_payments_count(schedule),
    )


@router.get("", response_model=SuccessResponse[list[PaymentScheduleResponse]])
async def list_payment_schedules(
    academic_year: str | None = Query(None),
    search: str | None = Query(None),
    show_historical: bool = Query(False),
    store: InMemoryStore = Depends(get_store),
):
    """List payment schedules with countdowns and pending payment counts."""
    service = PaymentScheduleService(store)
    schedules = service.list_schedules(
        PaymentScheduleFilters(
            academic_year=academic_year,
            search=search,
            show_historical=show_historical,
        )
    )
    today = date.today()
    return SuccessResponse(data=[_schedule_to_response(s, service, today) for s in schedules])


@router.get("/summary", response_model=SuccessResponse[PaymentScheduleSummary])
async def get_payment_schedule_summary(
    store: InMemoryStore = Depends(get_store),
):
    service = PaymentScheduleService(store)
    return SuccessResponse(data=service.get_summary())


@router.post("", response_model=SuccessResponse[PaymentScheduleResponse], status_code=201)
async def create_payment_schedule(
    data: PaymentScheduleCreate,
    store: InMemoryStore = Depends(get_store),
):
    service = PaymentScheduleService(store)
    schedule = service.create_schedule(data)
    return SuccessResponse(
        data=_schedule_to_response(schedule, service),
        message="Payment schedule created successfully",
    )


@router.get("/{schedule_id}", response_model=SuccessResponse[PaymentScheduleResponse])
async def get_payment_schedule(
    schedule_id: str,
    store: InMemoryStore = Depends(get_store),
):
    service = PaymentScheduleService(store)
    schedule = service.get_schedule_by_id(schedule_id)
    return SuccessResponse(data=_schedule_to_response(schedule, service))


@router.put("/{schedule_id}", response_model=SuccessResponse[PaymentScheduleResponse])
async def update_payment_schedule(
    schedule_id: str,
    data: PaymentScheduleUpdate,
    store: InMemoryStore = Depends(get_store),
):
    service = PaymentScheduleService(store)
    schedule = service.update_schedule(schedule_id, data)
    return SuccessResponse(
        data=_schedule_to_response(schedule, service),
        message="Payment schedule updated successfully",
    )


@router.post("/{schedule_id}/deactivate", response_model=SuccessResponse[PaymentScheduleResponse])
async def deactivate_payment_schedule(
    schedule_id: str,
    store: InMemoryStore = Depends(get_store),
):
    service = PaymentScheduleService(store)
    schedule = service.deactivate_schedule(schedule_id)
    return SuccessResponse(
        data=_schedule_to_response(schedule, service),
        message="Payment schedule deactivated successfully",
    )


@router.post("/{schedule_id}/toggle-active", response_model=SuccessResponse[PaymentScheduleResponse])
async def toggle_payment_schedule(
    schedule_id: str,
    store: InMemoryStore = Depends(get_store),
):
    service = PaymentScheduleService(store)
    schedule = service.toggle_active(schedule_id)
    return SuccessResponse(
        data=_schedule_to_response(schedule, service),
        message="Payment schedule status updated successfully",
    )


@router.post("/{schedule_id}/send-reminders", response_model=SuccessResponse[ReminderDispatchResult])
async def send_payment_reminders(
    schedule_id: str,
    store: InMemoryStore = Depends(get_store),
    sender: ReminderSender = Depends(get_reminder_sender),
):
    """Send reminders for unpaid invoices of the schedule's term (simulated)."""
    service = PaymentScheduleService(store)
    result = service.send_reminders(schedule_id, sender)
    return SuccessResponse(
        data=result,
        message=f"Payment reminders sent for {result.invoices_notified} invoice(s)",
    )
