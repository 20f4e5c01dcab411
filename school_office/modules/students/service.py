"""Service for Students module."""

import logging

from school_office.core.audit import AuditAction, AuditService
from school_office.core.config import settings
from school_office.core.exceptions import InactiveRecordError, NotFoundError, ValidationError
from school_office.core.store import InMemoryStore
from school_office.modules.students.models import Student, StudentStatus
from school_office.modules.students.schemas import (
    StudentCreate,
    StudentFilters,
    StudentUpdate,
)
from school_office.modules.users.service import UserService

logger = logging.getLogger(__name__)


class StudentService:
    """Service for managing students; also the student directory for billing."""

    def __init__(self, store: InMemoryStore):
        self.store = store
        self.audit = AuditService(store)
        self.users = UserService(store)

    def get_student_by_id(self, student_id: str) -> Student:
        """Get student by ID."""
        student = self.store.students.find(student_id)
        if not student:
            raise NotFoundError("Student", student_id)
        return student

    def resolve(self, student_id: str) -> Student:
        """
        Resolve a student reference for billing.

        Unknown and inactive students are reported as validation errors on
        ``student_id`` rather than as missing resources.
        """
        student = self.store.students.find(student_id)
        if not student:
            raise ValidationError(f"Student with id {student_id} not found", field="student_id")
        if not student.is_active:
            raise ValidationError(f"Student '{student.name}' is not active", field="student_id")
        return student

    def list_students(self, filters: StudentFilters) -> tuple[list[Student], int]:
        """List students with filters and pagination."""
        search = filters.search.lower() if filters.search else None

        def matches(student: Student) -> bool:
            if filters.status and student.status != filters.status.value:
                return False
            if filters.class_name and student.class_name != filters.class_name:
                return False
            if filters.parent_id and student.parent_id != filters.parent_id:
                return False
            if search:
                return (
                    search in student.name.lower()
                    or search in student.class_name.lower()
                    or search in student.roll_number.lower()
                )
            return True

        return filters.slice(self.store.students.filter(matches))

    def create_student(self, data: StudentCreate) -> Student:
        """Create a student and link it to the parent's children."""
        parent = self.users.get_active_parent(data.parent_id)

        student = Student(
            id=self.store.ids.generate("STU"),
            name=data.name.strip(),
            email=data.email,
            class_name=data.class_name,
            section=data.section,
            roll_number=data.roll_number,
            parent_id=parent.id,
            academic_year=data.academic_year or settings.default_academic_year,
            date_of_birth=data.date_of_birth,
        )
        self.store.students.add(student)
        self.users.link_child(parent.id, student.id)

        self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Student",
            entity_id=student.id,
            entity_identifier=student.roll_number,
            new_values={
                "name": student.name,
                "class_name": student.class_name,
                "section": student.section,
                "parent_id": student.parent_id,
            },
        )
        return student

    def update_student(self, student_id: str, data: StudentUpdate) -> Student:
        """Update a student. Moving to another parent relinks both parents."""
        student = self.get_student_by_id(student_id)
        changes = data.model_dump(exclude_unset=True)
        # email may be cleared explicitly; other fields ignore nulls
        changes = {k: v for k, v in changes.items() if v is not None or k == "email"}

        new_parent_id = changes.get("parent_id")
        if new_parent_id and new_parent_id != student.parent_id:
            self.users.get_active_parent(new_parent_id)
        else:
            new_parent_id = None

        if not changes:
            return student

        old_values = {key: getattr(student, key) for key in changes}
        updated = self.store.students.replace(student.model_copy(update=changes))

        if new_parent_id:
            self.users.unlink_child(student.parent_id, student.id)
            self.users.link_child(new_parent_id, student.id)

        self.audit.log(
            action=AuditAction.UPDATE,
            entity_type="Student",
            entity_id=student.id,
            entity_identifier=updated.roll_number,
            old_values=old_values,
            new_values={key: getattr(updated, key) for key in changes},
        )
        return updated

    def deactivate_student(self, student_id: str) -> Student:
        """Deactivate a student. Invoices and parent links are kept."""
        student = self.get_student_by_id(student_id)
        if not student.is_active:
            raise InactiveRecordError("Student", student.id, "is already deactivated")

        updated = self.store.students.replace(
            student.model_copy(update={"status": StudentStatus.INACTIVE.value})
        )
        self.audit.log(
            action=AuditAction.DEACTIVATE,
            entity_type="Student",
            entity_id=student.id,
            entity_identifier=student.roll_number,
            old_values={"status": StudentStatus.ACTIVE.value},
            new_values={"status": StudentStatus.INACTIVE.value},
        )
        return updated

    def activate_student(self, student_id: str) -> Student:
        """Re-activate a student."""
        student = self.get_student_by_id(student_id)
        if student.is_active:
            raise ValidationError("Student is already active")

        updated = self.store.students.replace(
            student.model_copy(update={"status": StudentStatus.ACTIVE.value})
        )
        self.audit.log(
            action=AuditAction.ACTIVATE,
            entity_type="Student",
            entity_id=student.id,
            entity_identifier=student.roll_number,
            old_values={"status": StudentStatus.INACTIVE.value},
            new_values={"status": StudentStatus.ACTIVE.value},
        )
        return updated
