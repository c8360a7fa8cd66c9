"""
Change history for every store mutation.

The audit trail is:
- Append-only (entries never modified or deleted)
- Actor-attributed (who made the change, when known)
- Detailed (captures old and new values)

It lives in memory next to the store and disappears with it.
"""

import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel

from utils.user_context import peek_current_actor
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class AuditAction(str, Enum):
    """Type of change made to a record."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class AuditEntry(BaseModel):
    """One recorded change."""

    id: UUID
    actor: str | None
    entity_type: str
    entity_id: UUID
    action: AuditAction
    changes: dict[str, Any]
    created_at: datetime

    model_config = {"frozen": True}


def compute_changes(
    old: dict[str, Any],
    new: dict[str, Any],
    exclude_fields: set[str] | None = None
) -> dict[str, dict[str, Any]]:
    """
    Compute changes between two record states.

    Args:
        old: Previous state of record
        new: New state of record
        exclude_fields: Fields to ignore

    Returns:
        Dict of {field: {"old": old_val, "new": new_val}} for changed fields.
        Empty dict if no changes.
    """
    exclude = exclude_fields or set()
    changes = {}

    for key in old.keys() | new.keys():
        if key in exclude:
            continue

        old_val = old.get(key)
        new_val = new.get(key)

        if old_val != new_val:
            changes[key] = {"old": old_val, "new": new_val}

    return changes


class AuditLogger:
    """
    Append-only history of store mutations.

    Pass model_dump(mode="json") output as changes so UUIDs, datetimes and
    attachments are stored as plain JSON values.

    Usage:
        audit.log_change(
            entity_type="ticket",
            entity_id=ticket.id,
            action=AuditAction.UPDATE,
            changes=compute_changes(old.model_dump(mode="json"), new.model_dump(mode="json")),
        )
        history = audit.get_entity_history("ticket", ticket.id)
    """

    def __init__(self):
        self._entries: list[AuditEntry] = []
        self._lock = threading.Lock()

    def log_change(
        self,
        entity_type: str,
        entity_id: UUID,
        action: AuditAction,
        changes: dict[str, Any],
        actor: str | None = None
    ) -> AuditEntry:
        """
        Record a change.

        Args:
            entity_type: Type of record ("ticket", "comment", ...)
            entity_id: ID of the record
            action: The action performed
            changes: The changes made (format depends on action)
            actor: Who made the change (defaults to current context, may be None)

        Changes format by action:
        - CREATE: {"created": {full record data}}
        - UPDATE: {"field": {"old": old_val, "new": new_val}, ...}
        - DELETE: {"deleted": {full record data at deletion}}
        """
        entry = AuditEntry(
            id=uuid4(),
            actor=actor if actor is not None else peek_current_actor(),
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            changes=changes,
            created_at=now_utc(),
        )
        with self._lock:
            self._entries.append(entry)

        logger.debug("%s %s %s by %s", action.value, entity_type, entity_id, entry.actor)
        return entry

    def get_entity_history(self, entity_type: str, entity_id: UUID) -> list[AuditEntry]:
        """
        Full history for one record, newest first.
        """
        with self._lock:
            matching = [
                e for e in self._entries
                if e.entity_type == entity_type and e.entity_id == entity_id
            ]
        return list(reversed(matching))
