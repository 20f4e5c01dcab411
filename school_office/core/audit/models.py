from datetime import datetime
from typing import Any

from pydantic import Field

from school_office.core.store.base import Record


class AuditLog(Record):
    """Audit log for tracking all important changes in the system."""

    action: str
    entity_type: str
    entity_id: str
    entity_identifier: str | None = None

    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None

    comment: str | None = None

    created_at: datetime = Field(default_factory=datetime.now)
