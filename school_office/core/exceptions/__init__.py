from school_office.core.exceptions.base import (
    AppException,
    DuplicateError,
    InactiveRecordError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "AppException",
    "DuplicateError",
    "InactiveRecordError",
    "NotFoundError",
    "ValidationError",
]
