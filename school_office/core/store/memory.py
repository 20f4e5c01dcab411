from typing import TYPE_CHECKING

from school_office.core.documents.number_generator import DocumentNumberGenerator
from school_office.core.store.base import Table

if TYPE_CHECKING:
    from school_office.core.audit.models import AuditLog
    from school_office.modules.fee_structures.models import FeeStructure
    from school_office.modules.invoices.models import Invoice
    from school_office.modules.payment_schedules.models import PaymentSchedule
    from school_office.modules.students.models import Student
    from school_office.modules.users.models import User


class InMemoryStore:
    """All back-office state for one process.

    Services receive the store explicitly; nothing reads module-level state.
    """

    def __init__(self, ids: DocumentNumberGenerator | None = None):
        self.ids = ids or DocumentNumberGenerator()
        self.users: Table["User"] = Table("User")
        self.students: Table["Student"] = Table("Student")
        self.invoices: Table["Invoice"] = Table("Invoice")
        self.fee_structures: Table["FeeStructure"] = Table("Fee structure")
        self.payment_schedules: Table["PaymentSchedule"] = Table("Payment schedule")
        self.audit_logs: Table["AuditLog"] = Table("Audit log")

    def reset(self) -> None:
        for table in (
            self.users,
            self.students,
            self.invoices,
            self.fee_structures,
            self.payment_schedules,
            self.audit_logs,
        ):
            table.clear()
