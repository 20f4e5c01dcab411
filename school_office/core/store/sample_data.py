"""
Demo dataset for the back-office.

Names, classes and amounts are chosen so that the dashboard, the
invoice list and the reminder screens all show something meaningful:
one partially paid invoice, one fully paid, one overdue; two current fee
structures and one historical; three term payment schedules.
"""

from datetime import date
from decimal import Decimal

from school_office.core.store.memory import InMemoryStore
from school_office.modules.fee_structures.models import FeeItem, FeeStructure
from school_office.modules.invoices.models import Invoice, InvoiceItem, InvoiceStatus
from school_office.modules.payment_schedules.models import PaymentSchedule
from school_office.modules.students.models import Student
from school_office.modules.users.models import User, UserRole

ACADEMIC_YEAR = "2024-25"


def _users() -> list[User]:
    return [
        User(
            id="1",
            name="John Admin",
            email="admin@school.edu",
            role=UserRole.ADMIN.value,
            phone="+1234567890",
            address="123 School St",
            join_date=date(2023, 1, 15),
        ),
        User(
            id="2",
            name="Jane Teacher",
            email="jane.teacher@school.edu",
            role=UserRole.STAFF.value,
            phone="+1234567891",
            address="456 Teacher Ave",
            join_date=date(2023, 2, 20),
        ),
        User(
            id="3",
            name="Robert Parent",
            email="robert.parent@email.com",
            role=UserRole.PARENT.value,
            phone="+1234567892",
            address="789 Parent Rd",
            join_date=date(2023, 3, 10),
            children=["s1", "s2"],
        ),
        User(
            id="4",
            name="Mary Parent",
            email="mary.parent@email.com",
            role=UserRole.PARENT.value,
            phone="+1234567893",
            address="321 Family St",
            join_date=date(2023, 3, 15),
            children=["s3"],
        ),
    ]


def _students() -> list[Student]:
    return [
        Student(
            id="s1",
            name="Alice Smith",
            email="alice.student@school.edu",
            class_name="10",
            section="A",
            roll_number="10A01",
            parent_id="3",
            academic_year=ACADEMIC_YEAR,
            date_of_birth=date(2008, 5, 15),
        ),
        Student(
            id="s2",
            name="Bob Smith",
            email="bob.student@school.edu",
            class_name="8",
            section="B",
            roll_number="8B05",
            parent_id="3",
            academic_year=ACADEMIC_YEAR,
            date_of_birth=date(2010, 8, 22),
        ),
        Student(
            id="s3",
            name="Carol Johnson",
            class_name="9",
            section="A",
            roll_number="9A12",
            parent_id="4",
            academic_year=ACADEMIC_YEAR,
            date_of_birth=date(2009, 12, 3),
        ),
    ]


def _invoice(
    invoice_id: str,
    student: Student,
    items: list[tuple[str, str, int, str]],
    paid: int,
    due_date: date,
    status: InvoiceStatus,
) -> Invoice:
    lines = [
        InvoiceItem(id=item_id, description=description, amount=Decimal(amount), category=category)
        for item_id, description, amount, category in items
    ]
    total = sum((line.amount for line in lines), Decimal("0"))
    return Invoice(
        id=invoice_id,
        student_id=student.id,
        student_name=student.name,
        academic_year=ACADEMIC_YEAR,
        term="Term 1",
        items=lines,
        total_amount=total,
        paid_amount=Decimal(paid),
        due_amount=total - Decimal(paid),
        due_date=due_date,
        status=status.value,
        created_date=date(2024, 8, 1),
    )


def _invoices(students: list[Student]) -> list[Invoice]:
    alice, bob, carol = students
    return [
        _invoice(
            "inv-001",
            alice,
            [
                ("item-1", "Tuition Fee", 12000, "tuition"),
                ("item-2", "Library Fee", 1500, "library"),
                ("item-3", "Activity Fee", 1500, "activity"),
            ],
            paid=10000,
            due_date=date(2024, 9, 30),
            status=InvoiceStatus.PARTIAL,
        ),
        _invoice(
            "inv-002",
            bob,
            [
                ("item-4", "Tuition Fee", 10000, "tuition"),
                ("item-5", "Library Fee", 1000, "library"),
                ("item-6", "Activity Fee", 1000, "activity"),
            ],
            paid=12000,
            due_date=date(2024, 9, 30),
            status=InvoiceStatus.PAID,
        ),
        _invoice(
            "inv-003",
            carol,
            [
                ("item-7", "Tuition Fee", 11000, "tuition"),
                ("item-8", "Library Fee", 1000, "library"),
                ("item-9", "Transport Fee", 1000, "transport"),
            ],
            paid=0,
            due_date=date(2024, 8, 15),
            status=InvoiceStatus.OVERDUE,
        ),
    ]


def _fee_structure(
    structure_id: str,
    academic_year: str,
    class_name: str,
    fees: list[tuple[str, str, str, int, bool]],
    is_active: bool,
    created_date: date,
) -> FeeStructure:
    return FeeStructure(
        id=structure_id,
        academic_year=academic_year,
        class_name=class_name,
        term="Term 1",
        fees=[
            FeeItem(
                id=fee_id,
                category=category,
                description=description,
                amount=Decimal(amount),
                is_optional=is_optional,
            )
            for fee_id, category, description, amount, is_optional in fees
        ],
        is_active=is_active,
        created_date=created_date,
    )


def _fee_structures() -> list[FeeStructure]:
    return [
        _fee_structure(
            "fee-struct-1",
            ACADEMIC_YEAR,
            "10",
            [
                ("fee-1", "tuition", "Tuition Fee", 12000, False),
                ("fee-2", "library", "Library Fee", 1500, False),
                ("fee-3", "activity", "Activity Fee", 1500, True),
                ("fee-4", "transport", "Transport Fee", 2000, True),
            ],
            is_active=True,
            created_date=date(2024, 7, 1),
        ),
        _fee_structure(
            "fee-struct-2",
            ACADEMIC_YEAR,
            "9",
            [
                ("fee-5", "tuition", "Tuition Fee", 11000, False),
                ("fee-6", "library", "Library Fee", 1000, False),
                ("fee-7", "activity", "Activity Fee", 1000, True),
                ("fee-8", "transport", "Transport Fee", 2000, True),
            ],
            is_active=True,
            created_date=date(2024, 7, 1),
        ),
        _fee_structure(
            "fee-struct-3",
            "2023-24",
            "10",
            [
                ("fee-9", "tuition", "Tuition Fee", 11000, False),
                ("fee-10", "library", "Library Fee", 1200, False),
                ("fee-11", "activity", "Activity Fee", 1000, True),
            ],
            is_active=False,
            created_date=date(2023, 7, 1),
        ),
    ]


def _payment_schedules() -> list[PaymentSchedule]:
    return [
        PaymentSchedule(
            id="schedule-1",
            academic_year=ACADEMIC_YEAR,
            term="Term 1",
            due_date=date(2024, 9, 30),
            reminder_date=date(2024, 9, 15),
            description="First Term Fee Payment",
        ),
        PaymentSchedule(
            id="schedule-2",
            academic_year=ACADEMIC_YEAR,
            term="Term 2",
            due_date=date(2024, 12, 31),
            reminder_date=date(2024, 12, 15),
            description="Second Term Fee Payment",
        ),
        PaymentSchedule(
            id="schedule-3",
            academic_year=ACADEMIC_YEAR,
            term="Term 3",
            due_date=date(2025, 3, 31),
            reminder_date=date(2025, 3, 15),
            description="Third Term Fee Payment",
        ),
    ]


def load_sample_data(store: InMemoryStore) -> None:
    """Replace the store contents with the demo dataset."""
    store.reset()
    students = _students()
    for user in _users():
        store.users.add(user)
    for student in students:
        store.students.add(student)
    for invoice in _invoices(students):
        store.invoices.add(invoice)
    for structure in _fee_structures():
        store.fee_structures.add(structure)
    for schedule in _payment_schedules():
        store.payment_schedules.add(schedule)
