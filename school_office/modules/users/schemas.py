from datetime import date

from pydantic import EmailStr, Field, field_validator

from school_office.modules.users.models import MANAGED_ROLES, UserRole, UserStatus
from school_office.shared.schemas import BaseSchema, PageRequest


def _validate_managed_role(v: UserRole | None) -> UserRole | None:
    if v is not None and v not in MANAGED_ROLES:
        raise ValueError("Role must be one of: staff, parent")
    return v


class UserCreate(BaseSchema):
    """Schema for creating a new user (staff or parent)."""

    name: str
    email: EmailStr
    role: UserRole = UserRole.PARENT
    phone: str = Field(..., min_length=10)
    address: str = Field(..., min_length=5)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        return _validate_managed_role(v)


class UserUpdate(BaseSchema):
    """Schema for updating a user."""

    name: str | None = None
    email: EmailStr | None = None
    role: UserRole | None = None
    phone: str | None = Field(None, min_length=10)
    address: str | None = Field(None, min_length=5)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if len(v) < 2:
                raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole | None) -> UserRole | None:
        return _validate_managed_role(v)


class UserResponse(BaseSchema):
    """Schema for user response."""

    id: str
    name: str
    email: str
    role: str
    phone: str | None
    address: str | None
    join_date: date
    status: str
    is_active: bool
    children: list[str]


class UserListFilters(PageRequest):
    """Filters for user list."""

    role: UserRole | None = None
    status: UserStatus | None = None
    search: str | None = None  # Search by name, email or role
    include_admins: bool = False
    limit: int = Field(20, ge=1, le=500)
