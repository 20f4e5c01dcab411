"""Student model."""

from datetime import date
from enum import StrEnum

from school_office.core.store.base import Record


class StudentStatus(StrEnum):
    """Student status enumeration."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Student(Record):
    """Student enrolled in a class; linked to one parent account."""

    name: str
    email: str | None = None
    class_name: str
    section: str
    roll_number: str
    parent_id: str
    academic_year: str
    date_of_birth: date
    status: str = StudentStatus.ACTIVE.value

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE.value
