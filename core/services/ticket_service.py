"""
Ticket service for the main ticket board.

New tickets land in the unassigned pool. Tickets are never deleted;
closing one is a status flip. Pools are positional: editing the assignee
or status does not move a ticket between pools.
"""

import logging
from uuid import UUID, uuid4

from core.audit import AuditLogger, AuditAction, compute_changes
from core.config import StoreConfig
from core.event_bus import EventBus
from core.events import StoreChanged
from core.exceptions import NotFoundError
from core.models import Ticket, TicketCreate, TicketUpdate, TicketPool, OriginKind
from core.queries import TicketFilter, filter_tickets, ticket_pool
from core.store import RecordStore
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class TicketService:
    """Service for ticket operations."""

    def __init__(
        self,
        store: RecordStore,
        audit: AuditLogger,
        event_bus: EventBus | None = None,
        config: StoreConfig | None = None,
    ):
        self.store = store
        self.audit = audit
        self.event_bus = event_bus
        self.config = config or StoreConfig()

    def create(self, data: TicketCreate) -> Ticket:
        """
        Create a new ticket in the unassigned pool.

        An empty title is accepted.

        Args:
            data: Ticket creation data

        Returns:
            Created ticket

        Raises:
            ValueError: If the assignee is not on the employee roster
        """
        self._check_assignee(data.assigned_to_email)

        ticket = Ticket(
            id=uuid4(),
            task=data.task,
            description=data.description,
            assigned_to_email=data.assigned_to_email,
            is_active=data.is_active,
            created_at=now_utc(),
        )

        with self.store.lock:
            self.store.add_ticket(TicketPool.UNASSIGNED, ticket)

        logger.info("Created ticket %s", ticket.id)
        self._record(
            ticket.id,
            AuditAction.CREATE,
            {"created": data.model_dump(mode="json")},
        )
        return ticket

    def get_by_id(self, ticket_id: UUID) -> Ticket | None:
        """
        Get ticket by ID, main pool or spawned.

        Returns:
            Ticket if found, None otherwise.
        """
        return self.store.find_ticket(ticket_id)

    def list_pool(self, pool: TicketPool) -> list[Ticket]:
        """Tickets in one pool, in insertion order."""
        return self.store.tickets(TicketPool(pool))

    def list_spawned(self, kind: OriginKind) -> list[Ticket]:
        """Tickets raised from the inventory or cleaning screens."""
        return self.store.spawned(OriginKind(kind))

    def search(self, filter: TicketFilter, search_text: str = "") -> list[Ticket]:
        """
        Filter the combined main-pool list.

        Args:
            filter: Status filter to apply
            search_text: Optional case-insensitive text search

        Returns:
            Matching tickets, assigned pool first, then unassigned, then past
        """
        return filter_tickets(ticket_pool(self.store), filter, search_text)

    def update(self, ticket_id: UUID, data: TicketUpdate) -> Ticket:
        """
        Edit ticket fields.

        Args:
            ticket_id: Ticket UUID
            data: Fields to update

        Returns:
            Updated ticket

        Raises:
            NotFoundError: If ticket not found
            ValueError: If the new assignee is not on the roster
        """
        updates = data.model_dump(exclude_none=True)
        if "assigned_to_email" in updates:
            self._check_assignee(updates["assigned_to_email"])

        with self.store.lock:
            current = self.store.find_ticket(ticket_id)
            if current is None:
                raise NotFoundError("ticket", ticket_id)

            if not updates:
                return current

            updated = current.model_copy(update=updates)
            self.store.replace_ticket(updated)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self._record(ticket_id, AuditAction.UPDATE, changes)

        return updated

    def toggle_active(self, ticket_id: UUID) -> Ticket | None:
        """
        Flip a ticket between open and closed.

        Args:
            ticket_id: Ticket UUID

        Returns:
            Updated ticket, or None if no ticket has this id (nothing changes)
        """
        with self.store.lock:
            current = self.store.find_ticket(ticket_id)
            if current is None:
                logger.warning("toggle_active ignored: ticket %s not found", ticket_id)
                return None

            updated = current.model_copy(update={"is_active": not current.is_active})
            self.store.replace_ticket(updated)

        self._record(
            ticket_id,
            AuditAction.UPDATE,
            {"is_active": {"old": current.is_active, "new": updated.is_active}},
        )
        return updated

    def _check_assignee(self, email: str) -> None:
        if not self.config.can_assign(email):
            raise ValueError(f"{email} is not on the employee roster")

    def _record(self, ticket_id: UUID, action: AuditAction, changes: dict) -> None:
        self.audit.log_change(
            entity_type="ticket",
            entity_id=ticket_id,
            action=action,
            changes=changes
        )
        if self.event_bus is not None:
            self.event_bus.publish(StoreChanged.create("ticket", ticket_id, action))
