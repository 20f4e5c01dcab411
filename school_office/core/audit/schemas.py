from datetime import datetime
from typing import Any

from school_office.shared.schemas import BaseSchema


class AuditLogResponse(BaseSchema):
    """Schema for audit log entry."""

    id: str
    action: str
    entity_type: str
    entity_id: str
    entity_identifier: str | None
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
    comment: str | None
    created_at: datetime
