from school_office.shared.schemas.base import (
    ApiResponse,
    BaseSchema,
    ErrorDetail,
    ErrorResponse,
    PageRequest,
    PaginatedResponse,
    SuccessResponse,
)

__all__ = [
    "ApiResponse",
    "BaseSchema",
    "ErrorDetail",
    "ErrorResponse",
    "PageRequest",
    "PaginatedResponse",
    "SuccessResponse",
]
