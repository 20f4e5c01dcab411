import logging
from datetime import date

from school_office.core.audit import AuditAction, AuditService
from school_office.core.config import settings
from school_office.core.exceptions import InactiveRecordError, NotFoundError, ValidationError
from school_office.core.notifications import ReminderSender
from school_office.core.store import InMemoryStore
from school_office.modules.invoices.models import Invoice
from school_office.modules.payment_schedules.models import PaymentSchedule, ScheduleState
from school_office.modules.payment_schedules.schemas import (
    PaymentScheduleCreate,
    PaymentScheduleFilters,
    PaymentScheduleSummary,
    PaymentScheduleUpdate,
    ReminderDispatchResult,
)

logger = logging.getLogger(__name__)


class PaymentScheduleService:
    """Service for payment schedules and the reminders they drive."""

    def __init__(self, store: InMemoryStore):
        self.store = store
        self.audit = AuditService(store)

    def get_schedule_by_id(self, schedule_id: str) -> PaymentSchedule:
        schedule = self.store.payment_schedules.find(schedule_id)
        if not schedule:
            raise NotFoundError("Payment schedule", schedule_id)
        return schedule

    def list_schedules(self, filters: PaymentScheduleFilters) -> list[PaymentSchedule]:
        search = filters.search.lower() if filters.search else None

        def matches(schedule: PaymentSchedule) -> bool:
            if not filters.show_historical and not schedule.is_active:
                return False
            if filters.academic_year and schedule.academic_year != filters.academic_year:
                return False
            if search:
                return (
                    search in schedule.term.lower()
                    or search in schedule.description.lower()
                    or search in schedule.academic_year.lower()
                )
            return True

        return self.store.payment_schedules.filter(matches)

    def create_schedule(self, data: PaymentScheduleCreate) -> PaymentSchedule:
        if data.reminder_date > data.due_date:
            raise ValidationError(
                "Reminder date must not be after the due date", field="reminder_date"
            )
        schedule = PaymentSchedule(
            id=self.store.ids.generate("SCH"),
            academic_year=data.academic_year,
            term=data.term,
            due_date=data.due_date,
            reminder_date=data.reminder_date,
            description=data.description.strip(),
        )
        self.store.payment_schedules.add(schedule)
        self.audit.log(
            action=AuditAction.CREATE,
            entity_type="PaymentSchedule",
            entity_id=schedule.id,
            entity_identifier=schedule.description,
            new_values={
                "term": schedule.term,
                "due_date": schedule.due_date.isoformat(),
                "reminder_date": schedule.reminder_date.isoformat(),
            },
        )
        return schedule

    def update_schedule(self, schedule_id: str, data: PaymentScheduleUpdate) -> PaymentSchedule:
        schedule = self.get_schedule_by_id(schedule_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return schedule

        candidate = schedule.model_copy(update=changes)
        if candidate.reminder_date > candidate.due_date:
            raise ValidationError(
                "Reminder date must not be after the due date", field="reminder_date"
            )

        updated = self.store.payment_schedules.replace(candidate)
        self.audit.log(
            action=AuditAction.UPDATE,
            entity_type="PaymentSchedule",
            entity_id=schedule.id,
            entity_identifier=updated.description,
            old_values={key: str(getattr(schedule, key)) for key in changes},
            new_values={key: str(getattr(updated, key)) for key in changes},
        )
        return updated

    def _set_active(self, schedule: PaymentSchedule, is_active: bool) -> PaymentSchedule:
        updated = self.store.payment_schedules.replace(
            schedule.model_copy(update={"is_active": is_active})
        )
        self.audit.log(
            action=AuditAction.ACTIVATE if is_active else AuditAction.DEACTIVATE,
            entity_type="PaymentSchedule",
            entity_id=schedule.id,
            entity_identifier=schedule.description,
            old_values={"is_active": schedule.is_active},
            new_values={"is_active": is_active},
        )
        return updated

    def deactivate_schedule(self, schedule_id: str) -> PaymentSchedule:
        """Deactivate a schedule. It stays available as historical."""
        schedule = self.get_schedule_by_id(schedule_id)
        if not schedule.is_active:
            raise InactiveRecordError("Payment schedule", schedule.id, "is already inactive")
        return self._set_active(schedule, False)

    def toggle_active(self, schedule_id: str) -> PaymentSchedule:
        schedule = self.get_schedule_by_id(schedule_id)
        return self._set_active(schedule, not schedule.is_active)

    # --- Reminders ---

    def _term_invoices(self, schedule: PaymentSchedule) -> list[Invoice]:
        return self.store.invoices.filter(
            lambda inv: inv.term == schedule.term
            and inv.academic_year == schedule.academic_year
        )

    def pending_payments_count(self, schedule: PaymentSchedule) -> int:
        """Invoices of the schedule's term that still expect money."""
        return sum(1 for inv in self._term_invoices(schedule) if inv.is_outstanding)

    def send_reminders(
        self, schedule_id: str, sender: ReminderSender
    ) -> ReminderDispatchResult:
        """
        Hand the unpaid invoices of the schedule's term to the reminder sender.

        Invoices are only read, never modified.
        """
        schedule = self.get_schedule_by_id(schedule_id)
        if not schedule.is_active:
            raise InactiveRecordError(
                "Payment schedule", schedule.id, "is inactive; reminders are not sent"
            )

        invoice_ids = [inv.id for inv in self._term_invoices(schedule) if inv.needs_reminder]
        notified = sender.send(invoice_ids, context=f"{schedule.academic_year} {schedule.term}")

        self.audit.log(
            action=AuditAction.SEND_REMINDERS,
            entity_type="PaymentSchedule",
            entity_id=schedule.id,
            entity_identifier=schedule.description,
            new_values={"invoices_notified": notified},
        )
        return ReminderDispatchResult(
            schedule_id=schedule.id,
            academic_year=schedule.academic_year,
            term=schedule.term,
            invoices_notified=notified,
            invoice_ids=invoice_ids,
        )

    def get_summary(self, today: date | None = None) -> PaymentScheduleSummary:
        today = today or date.today()
        schedules = self.store.payment_schedules.all()
        return PaymentScheduleSummary(
            active_schedules=sum(1 for s in schedules if s.is_active),
            due_soon=sum(
                1
                for s in schedules
                if s.is_active and 0 <= s.days_until_due(today) <= settings.due_soon_days
            ),
            outstanding_invoices=sum(1 for inv in self.store.invoices if inv.is_outstanding),
        )

    def state_of(self, schedule: PaymentSchedule, today: date | None = None) -> ScheduleState:
        return schedule.state(today or date.today(), settings.due_soon_days)
