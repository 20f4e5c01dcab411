from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from school_office.core.config import settings

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Base Pydantic schema; reads attributes so records convert directly."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# --- Envelopes ---


class ErrorDetail(BaseSchema):
    """One rejected field (``None`` when the error is not tied to a field)."""

    field: str | None = None
    message: str


class SuccessResponse(BaseSchema, Generic[T]):
    success: bool = True
    data: T
    message: str | None = None


ApiResponse = SuccessResponse


class ErrorResponse(BaseSchema):
    success: bool = False
    data: None = None
    message: str
    errors: list[ErrorDetail] = []


# --- Pagination ---


class PageRequest(BaseSchema):
    """Page/limit pair; list filters extend it."""

    page: int = Field(1, ge=1)
    limit: int = Field(default_factory=lambda: settings.default_page_limit, ge=1, le=500)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def slice(self, records: Sequence[T]) -> tuple[list[T], int]:
        """Cut one page out of a full result set. Returns (page items, total)."""
        return list(records[self.offset:self.offset + self.limit]), len(records)


class PaginatedResponse(BaseSchema, Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def create(cls, items: list[T], total: int, page: int, limit: int) -> "PaginatedResponse[T]":
        pages = -(-total // limit) if limit > 0 else 0
        return cls(items=items, total=total, page=page, limit=limit, pages=pages)
