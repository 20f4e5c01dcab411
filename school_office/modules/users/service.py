import logging

from school_office.core.audit import AuditAction, AuditService
from school_office.core.exceptions import (
    DuplicateError,
    InactiveRecordError,
    NotFoundError,
    ValidationError,
)
from school_office.core.store import InMemoryStore
from school_office.modules.users.models import User, UserRole, UserStatus
from school_office.modules.users.schemas import UserCreate, UserListFilters, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user management operations."""

    def __init__(self, store: InMemoryStore):
        self.store = store
        self.audit = AuditService(store)

    def get_by_id(self, user_id: str) -> User | None:
        """Get user by ID."""
        return self.store.users.find(user_id)

    def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        email = email.lower()
        for user in self.store.users:
            if user.email.lower() == email:
                return user
        return None

    def get_user(self, user_id: str) -> User:
        user = self.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def get_active_parent(self, parent_id: str) -> User:
        """Resolve a parent reference, rejecting unknown or inactive parents."""
        parent = self.get_by_id(parent_id)
        if not parent or not parent.is_parent:
            raise ValidationError(f"Parent with id {parent_id} not found", field="parent_id")
        if not parent.is_active:
            raise ValidationError(f"Parent '{parent.name}' is not active", field="parent_id")
        return parent

    def list_users(self, filters: UserListFilters) -> tuple[list[User], int]:
        """
        List users with filters and pagination.

        Admin accounts are left out unless ``include_admins`` is set.

        Returns:
            Tuple of (users list, total count)
        """
        search = filters.search.lower() if filters.search else None

        def matches(user: User) -> bool:
            if not filters.include_admins and user.role == UserRole.ADMIN.value:
                return False
            if filters.role and user.role != filters.role.value:
                return False
            if filters.status and user.status != filters.status.value:
                return False
            if search:
                return (
                    search in user.name.lower()
                    or search in user.email.lower()
                    or search in user.role.lower()
                )
            return True

        users = sorted(self.store.users.filter(matches), key=lambda u: u.name)
        return filters.slice(users)

    def create(self, data: UserCreate) -> User:
        """Create a new staff or parent account."""
        if self.get_by_email(data.email):
            raise DuplicateError("User", "email", data.email)

        user = User(
            id=self.store.ids.generate("USR"),
            name=data.name,
            email=data.email,
            role=data.role.value,
            phone=data.phone,
            address=data.address,
            children=[],
        )
        self.store.users.add(user)

        self.audit.log(
            action=AuditAction.CREATE,
            entity_type="User",
            entity_id=user.id,
            entity_identifier=user.email,
            new_values={"name": user.name, "email": user.email, "role": user.role},
        )
        return user

    def update(self, user_id: str, data: UserUpdate) -> User:
        """Update user data."""
        user = self.get_user(user_id)

        old_values = {
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "phone": user.phone,
            "address": user.address,
        }
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes and changes["email"].lower() != user.email.lower():
            if self.get_by_email(changes["email"]):
                raise DuplicateError("User", "email", changes["email"])

        if "role" in changes:
            changes["role"] = changes["role"].value
            if user.is_parent and user.children and changes["role"] != UserRole.PARENT.value:
                raise ValidationError(
                    "Cannot change role of a parent with linked students", field="role"
                )

        updated = self.store.users.replace(user.model_copy(update=changes))

        if changes:
            self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="User",
                entity_id=updated.id,
                entity_identifier=updated.email,
                old_values={key: old_values[key] for key in changes},
                new_values={key: getattr(updated, key) for key in changes},
            )
        return updated

    def deactivate(self, user_id: str) -> User:
        """Deactivate a user. The account is kept for history."""
        user = self.get_user(user_id)
        if not user.is_active:
            raise InactiveRecordError("User", user.id, "is already deactivated")

        updated = self.store.users.replace(
            user.model_copy(update={"status": UserStatus.INACTIVE.value})
        )
        self.audit.log(
            action=AuditAction.DEACTIVATE,
            entity_type="User",
            entity_id=user.id,
            entity_identifier=user.email,
            old_values={"status": UserStatus.ACTIVE.value},
            new_values={"status": UserStatus.INACTIVE.value},
            comment="User deactivated",
        )
        return updated

    def activate(self, user_id: str) -> User:
        """Activate a user."""
        user = self.get_user(user_id)
        if user.is_active:
            raise ValidationError("User is already active")

        updated = self.store.users.replace(
            user.model_copy(update={"status": UserStatus.ACTIVE.value})
        )
        self.audit.log(
            action=AuditAction.ACTIVATE,
            entity_type="User",
            entity_id=user.id,
            entity_identifier=user.email,
            old_values={"status": UserStatus.INACTIVE.value},
            new_values={"status": UserStatus.ACTIVE.value},
            comment="User activated",
        )
        return updated

    def link_child(self, parent_id: str, student_id: str) -> User:
        """Add a student to a parent's children list."""
        parent = self.get_user(parent_id)
        if student_id in parent.children:
            return parent
        return self.store.users.replace(
            parent.model_copy(update={"children": [*parent.children, student_id]})
        )

    def unlink_child(self, parent_id: str, student_id: str) -> User:
        """Remove a student from a parent's children list."""
        parent = self.get_user(parent_id)
        if student_id not in parent.children:
            return parent
        return self.store.users.replace(
            parent.model_copy(
                update={"children": [c for c in parent.children if c != student_id]}
            )
        )
