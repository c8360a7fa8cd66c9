"""
Cleaning checklist service.

Marking a task done stamps it with the current time (and who did it);
marking it pending again clears both.
"""

import logging
from uuid import UUID, uuid4

from core.audit import AuditLogger, AuditAction, compute_changes
from core.event_bus import EventBus
from core.events import StoreChanged
from core.exceptions import NotFoundError
from core.models import CleaningTask, OriginKind, SupplyItem, Ticket, TicketOrigin
from core.store import RecordStore
from utils.user_context import peek_current_actor
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

RAISED_FROM_CLEANING = "Raised from Cleaning task"


class CleaningService:
    """Service for cleaning tasks, supplies and maintenance issues."""

    def __init__(self, store: RecordStore, audit: AuditLogger, event_bus: EventBus | None = None):
        self.store = store
        self.audit = audit
        self.event_bus = event_bus

    def get_by_id(self, task_id: UUID) -> CleaningTask | None:
        return self.store.find_cleaning_task(task_id)

    def list_tasks(self) -> list[CleaningTask]:
        return self.store.cleaning()

    def list_supplies(self) -> list[SupplyItem]:
        return self.store.supplies()

    def list_issues(self) -> list[Ticket]:
        """Maintenance issues, i.e. tickets raised from the cleaning screen."""
        return self.store.spawned(OriginKind.CLEANING)

    def toggle_done(self, task_id: UUID) -> CleaningTask | None:
        """
        Flip a task between done and pending for today.

        Args:
            task_id: Cleaning task UUID

        Returns:
            Updated task, or None if no task has this id (nothing changes)
        """
        with self.store.lock:
            current = self.store.find_cleaning_task(task_id)
            if current is None:
                logger.warning("toggle_done ignored: cleaning task %s not found", task_id)
                return None

            if current.done_today:
                updates = {"done_today": False, "last_done": None, "completed_by": None}
            else:
                updates = {
                    "done_today": True,
                    "last_done": now_utc(),
                    "completed_by": peek_current_actor(),
                }
            updated = current.model_copy(update=updates)
            self.store.replace_cleaning_task(updated)

        self.audit.log_change(
            entity_type="cleaning_task",
            entity_id=task_id,
            action=AuditAction.UPDATE,
            changes=compute_changes(
                current.model_dump(mode="json"),
                updated.model_dump(mode="json"),
            ),
        )
        self._publish("cleaning_task", task_id, AuditAction.UPDATE)
        return updated

    def raise_issue(self, task_id: UUID) -> Ticket:
        """
        Raise a maintenance issue against a cleaning task.

        The task itself is left untouched.

        Raises:
            NotFoundError: If task not found
        """
        with self.store.lock:
            task = self.store.find_cleaning_task(task_id)
            if task is None:
                raise NotFoundError("cleaning task", task_id)

            ticket = Ticket(
                id=uuid4(),
                task=f"Issue with {task.title}",
                description=RAISED_FROM_CLEANING,
                assigned_to_email="",
                is_active=True,
                origin=TicketOrigin(kind=OriginKind.CLEANING, source_id=task.id),
                created_at=now_utc(),
            )
            self.store.add_spawned(ticket)

        logger.info("Raised ticket %s from cleaning task %s", ticket.id, task_id)
        self.audit.log_change(
            entity_type="ticket",
            entity_id=ticket.id,
            action=AuditAction.CREATE,
            changes={"created": ticket.model_dump(mode="json")},
        )
        self._publish("ticket", ticket.id, AuditAction.CREATE)
        return ticket

    def _publish(self, entity_type: str, entity_id: UUID, action: AuditAction) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(StoreChanged.create(entity_type, entity_id, action))
