import logging
from enum import StrEnum
from typing import Any

from school_office.core.audit.models import AuditLog
from school_office.core.store import InMemoryStore

logger = logging.getLogger(__name__)


class AuditAction(StrEnum):
    """Standard audit actions."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    DEACTIVATE = "DEACTIVATE"
    ACTIVATE = "ACTIVATE"

    # Domain-specific actions
    RECORD_PAYMENT = "RECORD_PAYMENT"
    REFRESH_STATUS = "REFRESH_STATUS"
    SEND_REMINDERS = "SEND_REMINDERS"


class AuditService:
    """Service for creating audit logs."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def log(
        self,
        action: str | AuditAction,
        entity_type: str,
        entity_id: str,
        entity_identifier: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        comment: str | None = None,
    ) -> AuditLog:
        """Create an audit log entry."""
        audit_log = AuditLog(
            id=self.store.ids.generate("AUD"),
            action=str(action),
            entity_type=entity_type,
            entity_id=entity_id,
            entity_identifier=entity_identifier,
            old_values=old_values,
            new_values=new_values,
            comment=comment,
        )
        self.store.audit_logs.add(audit_log)
        logger.info(
            "%s %s %s%s",
            audit_log.action,
            entity_type,
            entity_id,
            f" ({comment})" if comment else "",
        )
        return audit_log

    def list_entries(
        self,
        *,
        entity_type: str | None = None,
        entity_id: str | None = None,
        action: str | None = None,
    ) -> list[AuditLog]:
        """List audit entries, newest first."""

        def matches(entry: AuditLog) -> bool:
            if entity_type and entry.entity_type != entity_type:
                return False
            if entity_id and entry.entity_id != entity_id:
                return False
            if action and entry.action != action:
                return False
            return True

        return list(reversed(self.store.audit_logs.filter(matches)))
