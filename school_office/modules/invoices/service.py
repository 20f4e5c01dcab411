"""Service for Invoices module (the invoice ledger)."""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from school_office.core.audit import AuditAction, AuditService
from school_office.core.exceptions import InactiveRecordError, NotFoundError, ValidationError
from school_office.core.store import InMemoryStore
from school_office.modules.fee_structures.service import FeeStructureService
from school_office.modules.invoices.models import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    derive_status,
)
from school_office.modules.invoices.schemas import (
    InvoiceCreate,
    InvoiceFilters,
    InvoiceFromFeeStructureRequest,
    InvoiceItemCreate,
    InvoiceUpdate,
    StatusRefreshResult,
)
from school_office.modules.students.service import StudentService
from school_office.shared.utils.money import ZERO, round_money, sum_money, to_money

logger = logging.getLogger(__name__)


class InvoiceService:
    """
    Service for managing invoices.

    Keeps ``total_amount``, ``due_amount`` and ``status`` consistent with
    the items and the recorded payment. Every operation validates first and
    then swaps in a complete new invoice record, so a rejected call never
    leaves a half-updated invoice behind.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store
        self.audit = AuditService(store)
        self.students = StudentService(store)

    # --- Helper Methods ---

    def _build_items(self, items: Sequence[InvoiceItemCreate]) -> list[InvoiceItem]:
        """Validate line items and assign ids."""
        if not items:
            raise ValidationError("At least one item is required", field="items")

        amounts = []
        for index, item in enumerate(items):
            try:
                amount = to_money(item.amount)
            except ValueError as exc:
                raise ValidationError(str(exc), field=f"items.{index}.amount") from exc
            if amount < 0:
                raise ValidationError(
                    "Amount cannot be negative", field=f"items.{index}.amount"
                )
            if not item.description.strip():
                raise ValidationError(
                    "Description is required", field=f"items.{index}.description"
                )
            amounts.append(amount)

        return [
            InvoiceItem(
                id=self.store.ids.generate("ITM"),
                description=item.description.strip(),
                amount=amount,
                category=item.category.value,
            )
            for item, amount in zip(items, amounts)
        ]

    def _require_editable(self, invoice: Invoice) -> None:
        if not invoice.is_editable:
            raise InactiveRecordError("Invoice", invoice.id, "has been deleted")

    # --- Invoice CRUD ---

    def create_invoice(self, data: InvoiceCreate, today: date | None = None) -> Invoice:
        """Create a pending invoice with nothing paid yet."""
        today = today or date.today()
        student = self.students.resolve(data.student_id)
        items = self._build_items(data.items)

        total_amount = sum_money(item.amount for item in items)
        invoice = Invoice(
            id=self.store.ids.generate("INV"),
            student_id=student.id,
            student_name=student.name,
            academic_year=data.academic_year,
            term=data.term,
            items=items,
            total_amount=total_amount,
            paid_amount=ZERO,
            due_amount=total_amount,
            due_date=data.due_date,
            status=InvoiceStatus.PENDING.value,
            created_date=today,
        )
        self.store.invoices.add(invoice)

        self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Invoice",
            entity_id=invoice.id,
            entity_identifier=student.name,
            new_values={
                "student_id": invoice.student_id,
                "term": invoice.term,
                "total_amount": str(invoice.total_amount),
                "due_date": invoice.due_date.isoformat(),
            },
        )
        return invoice

    def create_from_fee_structure(
        self, data: InvoiceFromFeeStructureRequest, today: date | None = None
    ) -> Invoice:
        """Create an invoice whose items come from a fee structure."""
        structure = FeeStructureService(self.store).get_active_structure(data.fee_structure_id)
        items = [
            InvoiceItemCreate(
                description=fee.description,
                amount=fee.amount,
                category=fee.category,
            )
            for fee in structure.fees
            if data.include_optional or not fee.is_optional
        ]
        return self.create_invoice(
            InvoiceCreate(
                student_id=data.student_id,
                academic_year=structure.academic_year,
                term=structure.term,
                due_date=data.due_date,
                items=items,
            ),
            today=today,
        )

    def get_invoice_by_id(self, invoice_id: str) -> Invoice:
        """Get invoice by ID (deleted invoices included)."""
        invoice = self.store.invoices.find(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice", invoice_id)
        return invoice

    def list_invoices(self, filters: InvoiceFilters) -> tuple[list[Invoice], int]:
        """List invoices with filters and free-text search."""
        search = filters.search.lower() if filters.search else None

        def matches(invoice: Invoice) -> bool:
            if not filters.include_inactive and not invoice.is_active:
                return False
            if filters.student_id and invoice.student_id != filters.student_id:
                return False
            if filters.academic_year and invoice.academic_year != filters.academic_year:
                return False
            if filters.term and invoice.term != filters.term:
                return False
            if filters.status and invoice.status != filters.status.value:
                return False
            if search:
                return any(
                    search in value.lower()
                    for value in (
                        invoice.student_name,
                        invoice.academic_year,
                        invoice.term,
                        invoice.status,
                    )
                )
            return True

        return filters.slice(self.store.invoices.filter(matches))

    def list_for_student(self, student_id: str, include_inactive: bool = False) -> list[Invoice]:
        return self.store.invoices.filter(
            lambda inv: inv.student_id == student_id and (include_inactive or inv.is_active)
        )

    def outstanding(self, term: str | None = None) -> list[Invoice]:
        """Active invoices still expecting payment (pending, overdue, partial)."""
        return self.store.invoices.filter(
            lambda inv: inv.is_outstanding and (term is None or inv.term == term)
        )

    def update_invoice(
        self, invoice_id: str, data: InvoiceUpdate, today: date | None = None
    ) -> Invoice:
        """
        Update invoice fields.

        New items replace the old list and recompute ``total_amount`` and
        ``due_amount`` against the amount already paid. Status is re-derived
        whenever the items or the due date change.
        """
        today = today or date.today()
        invoice = self.get_invoice_by_id(invoice_id)
        self._require_editable(invoice)

        changes: dict = {}
        if data.student_id is not None and data.student_id != invoice.student_id:
            student = self.students.resolve(data.student_id)
            changes["student_id"] = student.id
            changes["student_name"] = student.name
        if data.academic_year is not None:
            changes["academic_year"] = data.academic_year
        if data.term is not None:
            changes["term"] = data.term
        if data.due_date is not None:
            changes["due_date"] = data.due_date
        if data.items is not None:
            items = self._build_items(data.items)
            total_amount = sum_money(item.amount for item in items)
            changes["items"] = items
            changes["total_amount"] = total_amount
            changes["due_amount"] = round_money(total_amount - invoice.paid_amount)

        if not changes:
            return invoice

        if "items" in changes or "due_date" in changes:
            changes["status"] = derive_status(
                changes.get("total_amount", invoice.total_amount),
                invoice.paid_amount,
                changes.get("due_date", invoice.due_date),
                today,
            ).value

        updated = self.store.invoices.replace(invoice.model_copy(update=changes))

        self.audit.log(
            action=AuditAction.UPDATE,
            entity_type="Invoice",
            entity_id=invoice.id,
            entity_identifier=updated.student_name,
            old_values={
                "total_amount": str(invoice.total_amount),
                "due_amount": str(invoice.due_amount),
                "status": invoice.status,
            },
            new_values={
                "total_amount": str(updated.total_amount),
                "due_amount": str(updated.due_amount),
                "status": updated.status,
            },
            comment=", ".join(sorted(k for k in changes if k != "status")),
        )
        return updated

    def delete_invoice(self, invoice_id: str) -> Invoice:
        """Delete an invoice. The record is deactivated and kept for history."""
        invoice = self.get_invoice_by_id(invoice_id)
        self._require_editable(invoice)

        updated = self.store.invoices.replace(invoice.model_copy(update={"is_active": False}))
        self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Invoice",
            entity_id=invoice.id,
            entity_identifier=invoice.student_name,
            old_values={"is_active": True},
            new_values={"is_active": False},
        )
        return updated

    # --- Payments ---

    def record_payment(
        self,
        invoice_id: str,
        paid_amount: Decimal | int | float | str,
        today: date | None = None,
    ) -> Invoice:
        """
        Set the total amount paid against an invoice.

        The amount replaces the previous figure (a correction may lower it).
        ``due_amount`` and ``status`` are derived from the new value.
        """
        today = today or date.today()
        invoice = self.get_invoice_by_id(invoice_id)
        self._require_editable(invoice)

        try:
            paid_amount = to_money(paid_amount)
        except ValueError as exc:
            raise ValidationError(str(exc), field="paid_amount") from exc
        if paid_amount < 0:
            raise ValidationError("Paid amount cannot be negative", field="paid_amount")

        status = derive_status(invoice.total_amount, paid_amount, invoice.due_date, today)
        updated = self.store.invoices.replace(
            invoice.model_copy(
                update={
                    "paid_amount": paid_amount,
                    "due_amount": round_money(invoice.total_amount - paid_amount),
                    "status": status.value,
                }
            )
        )

        self.audit.log(
            action=AuditAction.RECORD_PAYMENT,
            entity_type="Invoice",
            entity_id=invoice.id,
            entity_identifier=invoice.student_name,
            old_values={"paid_amount": str(invoice.paid_amount), "status": invoice.status},
            new_values={"paid_amount": str(updated.paid_amount), "status": updated.status},
        )
        return updated

    def refresh_statuses(self, today: date | None = None) -> StatusRefreshResult:
        """
        Re-derive the status of every active invoice against ``today``.

        Moves unpaid invoices past their due date to overdue without waiting
        for the next payment update.
        """
        today = today or date.today()
        checked = 0
        updated_ids: list[str] = []

        for invoice in self.store.invoices.filter(lambda inv: inv.is_active):
            checked += 1
            status = derive_status(
                invoice.total_amount, invoice.paid_amount, invoice.due_date, today
            ).value
            if status == invoice.status:
                continue
            self.store.invoices.replace(invoice.model_copy(update={"status": status}))
            self.audit.log(
                action=AuditAction.REFRESH_STATUS,
                entity_type="Invoice",
                entity_id=invoice.id,
                old_values={"status": invoice.status},
                new_values={"status": status},
            )
            updated_ids.append(invoice.id)

        if updated_ids:
            logger.info("Refreshed status of %d invoice(s)", len(updated_ids))

        return StatusRefreshResult(
            invoices_checked=checked,
            invoices_updated=len(updated_ids),
            updated_invoice_ids=updated_ids,
        )
