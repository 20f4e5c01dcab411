from fastapi import APIRouter, Depends, Query

from school_office.core.store import InMemoryStore, get_store
from school_office.modules.users.models import UserRole, UserStatus
from school_office.modules.users.schemas import (
    UserCreate,
    UserListFilters,
    UserResponse,
    UserUpdate,
)
from school_office.modules.users.service import UserService
from school_office.shared.schemas import PaginatedResponse, SuccessResponse
from school_office.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/users", tags=["Users"])


def _user_to_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        phone=user.phone,
        address=user.address,
        join_date=user.join_date,
        status=user.status,
        is_active=user.is_active,
        children=list(user.children),
    )


@router.get("", response_model=ApiResponse[PaginatedResponse[UserResponse]])
async def list_users(
    role: UserRole | None = Query(None),
    status: UserStatus | None = Query(None),
    search: str | None = Query(None),
    include_admins: bool = Query(False),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=500),
    store: InMemoryStore = Depends(get_store),
):
    """
    List staff and parent accounts.

    Admin accounts are hidden unless include_admins is set.
    """
    service = UserService(store)

    filters = UserListFilters(
        role=role,
        status=status,
        search=search,
        include_admins=include_admins,
        page=page,
        limit=limit,
    )

    users, total = service.list_users(filters)

    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[_user_to_response(u) for u in users],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/{user_id}", response_model=SuccessResponse[UserResponse])
async def get_user(
    user_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Get user by ID."""
    service = UserService(store)
    user = service.get_user(user_id)
    return SuccessResponse(data=_user_to_response(user))


@router.post("", response_model=SuccessResponse[UserResponse], status_code=201)
async def create_user(
    data: UserCreate,
    store: InMemoryStore = Depends(get_store),
):
    """Create a staff or parent account."""
    service = UserService(store)
    user = service.create(data)
    return SuccessResponse(
        data=_user_to_response(user),
        message="User created successfully",
    )


@router.put("/{user_id}", response_model=SuccessResponse[UserResponse])
async def update_user(
    user_id: str,
    data: UserUpdate,
    store: InMemoryStore = Depends(get_store),
):
    """Update user data."""
    service = UserService(store)
    user = service.update(user_id, data)
    return SuccessResponse(
        data=_user_to_response(user),
        message="User updated successfully",
    )


@router.post("/{user_id}/deactivate", response_model=SuccessResponse[UserResponse])
async def deactivate_user(
    user_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Deactivate a user. The record is kept."""
    service = UserService(store)
    user = service.deactivate(user_id)
    return SuccessResponse(
        data=_user_to_response(user),
        message="User deactivated successfully",
    )


@router.post("/{user_id}/activate", response_model=SuccessResponse[UserResponse])
async def activate_user(
    user_id: str,
    store: InMemoryStore = Depends(get_store),
):
    """Re-activate a deactivated user."""
    service = UserService(store)
    user = service.activate(user_id)
    return SuccessResponse(
        data=_user_to_response(user),
        message="User activated successfully",
    )
