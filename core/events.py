"""
Store change events.

The store publishes exactly one kind of notification: something changed.
Subscribers (a UI refresh, a websocket push, a test probe) re-read through
the query layer; the event tells them which record moved, not its new state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from core.audit import AuditAction
from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class StoreEvent:
    """Base class for all store events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


@dataclass(frozen=True, kw_only=True)
class StoreChanged(StoreEvent):
    """A record was created, updated or deleted."""
    entity_type: str
    entity_id: UUID
    action: AuditAction

    @classmethod
    def create(cls, entity_type: str, entity_id: UUID, action: AuditAction) -> "StoreChanged":
        return cls(entity_type=entity_type, entity_id=entity_id, action=action)
