"""User model."""

from datetime import date
from enum import StrEnum

from pydantic import Field

from school_office.core.store.base import Record


class UserRole(StrEnum):
    """User role enumeration."""

    ADMIN = "admin"
    STAFF = "staff"
    PARENT = "parent"
    STUDENT = "student"


# Roles an administrator may create or assign from the management screen
MANAGED_ROLES = frozenset({UserRole.STAFF, UserRole.PARENT})


class UserStatus(StrEnum):
    """User status enumeration."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class User(Record):
    """Staff member, parent or other back-office account."""

    name: str
    email: str
    role: str
    phone: str | None = None
    address: str | None = None
    join_date: date = Field(default_factory=date.today)
    status: str = UserStatus.ACTIVE.value
    # Student ids, parents only
    children: list[str] = Field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value

    @property
    def is_parent(self) -> bool:
        return self.role == UserRole.PARENT.value
