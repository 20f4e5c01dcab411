"""Schemas for Students module."""

from datetime import date

from pydantic import BaseModel, EmailStr, Field, field_validator

from school_office.modules.students.models import StudentStatus
from school_office.shared.schemas import PageRequest


def _empty_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class StudentCreate(BaseModel):
    """Schema for creating a student."""

    name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr | None = None
    class_name: str = Field(..., min_length=1, max_length=20)
    section: str = Field(..., min_length=1, max_length=10)
    roll_number: str = Field(..., min_length=1, max_length=20)
    parent_id: str = Field(..., min_length=1)
    date_of_birth: date
    academic_year: str | None = Field(None, min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        """The admission form sends an empty string when no email is given."""
        return _empty_to_none(v)


class StudentUpdate(BaseModel):
    """Schema for updating a student."""

    name: str | None = Field(None, min_length=2, max_length=200)
    email: EmailStr | None = None
    class_name: str | None = Field(None, min_length=1, max_length=20)
    section: str | None = Field(None, min_length=1, max_length=10)
    roll_number: str | None = Field(None, min_length=1, max_length=20)
    parent_id: str | None = Field(None, min_length=1)
    date_of_birth: date | None = None
    academic_year: str | None = Field(None, min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return _empty_to_none(v)


class StudentResponse(BaseModel):
    """Schema for student response."""

    id: str
    name: str
    email: str | None
    class_name: str
    section: str
    roll_number: str
    parent_id: str
    parent_name: str | None = None
    academic_year: str
    date_of_birth: date
    status: str

    model_config = {"from_attributes": True}


class StudentFilters(PageRequest):
    """Filters for listing students."""

    status: StudentStatus | None = None
    class_name: str | None = None
    parent_id: str | None = None
    search: str | None = None  # Search by name, class or roll number
