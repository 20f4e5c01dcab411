from typing import Any


class AppException(Exception):
    """Base application exception; the handler turns it into an error envelope."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Addressed record does not exist (path id, not a body reference)."""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id={identifier} not found"
        super().__init__(message=message, status_code=404, details={"id": identifier})


class ValidationError(AppException):
    """Malformed input, negative amount or unresolved reference.

    Always raised before the store is touched, so a rejected operation
    leaves no partial state behind.
    """

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message=message, status_code=422, details=details)


class InactiveRecordError(ValidationError):
    """Change requested on a deleted or deactivated record."""

    def __init__(self, resource: str, identifier: Any, reason: str = "is inactive"):
        super().__init__(f"{resource} {identifier} {reason}")
        self.details["id"] = identifier


class DuplicateError(AppException):
    """Unique field (e.g. a user's email) already taken."""

    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} with {field}={value} already exists"
        super().__init__(message=message, status_code=409, details={"field": field, "value": value})
