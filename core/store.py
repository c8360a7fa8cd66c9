"""
In-memory record store.

The store is the single owner of every collection. Records are frozen
pydantic models: a mutation replaces the record in its list rather than
editing it, so no element is ever shared between two owners.

Services call into the store while holding `store.lock`; readers get
copies of the lists so a concurrent writer cannot change what they iterate.
"""

import logging
import threading
from dataclasses import dataclass, field
from uuid import UUID

from core.models import (
    Bulletin,
    CleaningTask,
    InventoryItem,
    OriginKind,
    SupplyItem,
    Ticket,
    TicketComment,
    TicketPool,
)

logger = logging.getLogger(__name__)


@dataclass
class StoreSeed:
    """Initial contents of a store. Every field defaults to empty."""

    assigned: list[Ticket] = field(default_factory=list)
    unassigned: list[Ticket] = field(default_factory=list)
    past: list[Ticket] = field(default_factory=list)
    comments: dict[UUID, list[TicketComment]] = field(default_factory=dict)
    inventory: list[InventoryItem] = field(default_factory=list)
    cleaning: list[CleaningTask] = field(default_factory=list)
    spawned: dict[OriginKind, list[Ticket]] = field(default_factory=dict)
    supplies: list[SupplyItem] = field(default_factory=list)
    bulletins: list[Bulletin] = field(default_factory=list)


class RecordStore:
    """Authoritative collections for tickets, comments, inventory and cleaning."""

    def __init__(self):
        self.lock = threading.RLock()
        self._pools: dict[TicketPool, list[Ticket]] = {pool: [] for pool in TicketPool}
        self._comments: dict[UUID, list[TicketComment]] = {}
        self._inventory: list[InventoryItem] = []
        self._cleaning: list[CleaningTask] = []
        self._spawned: dict[OriginKind, list[Ticket]] = {
            OriginKind.INVENTORY: [],
            OriginKind.CLEANING: [],
        }
        self._supplies: list[SupplyItem] = []
        self._bulletins: list[Bulletin] = []

    # -------------------------------------------------------------------------
    # Tickets
    # -------------------------------------------------------------------------

    def tickets(self, pool: TicketPool) -> list[Ticket]:
        with self.lock:
            return list(self._pools[pool])

    def find_ticket(self, ticket_id: UUID) -> Ticket | None:
        """Locate a ticket in the main pools or the spawned collections."""
        with self.lock:
            for tickets in self._ticket_lists():
                for ticket in tickets:
                    if ticket.id == ticket_id:
                        return ticket
        return None

    def add_ticket(self, pool: TicketPool, ticket: Ticket) -> None:
        with self.lock:
            self._pools[pool].append(ticket)
            self._comments.setdefault(ticket.id, [])

    def replace_ticket(self, ticket: Ticket) -> None:
        """Swap in a new version of a ticket, keeping its collection and position."""
        with self.lock:
            for tickets in self._ticket_lists():
                for index, existing in enumerate(tickets):
                    if existing.id == ticket.id:
                        tickets[index] = ticket
                        return
        raise KeyError(ticket.id)

    def has_ticket(self, ticket_id: UUID) -> bool:
        """Whether the id names any ticket, main-pool or spawned."""
        with self.lock:
            return ticket_id in self._comments

    def _ticket_lists(self) -> list[list[Ticket]]:
        return [*self._pools.values(), *self._spawned.values()]

    # -------------------------------------------------------------------------
    # Spawned tickets
    # -------------------------------------------------------------------------

    def spawned(self, kind: OriginKind) -> list[Ticket]:
        with self.lock:
            return list(self._spawned.get(kind, []))

    def add_spawned(self, ticket: Ticket) -> None:
        if ticket.origin.kind == OriginKind.MANUAL:
            raise ValueError(f"Ticket {ticket.id} was not raised from another record")
        with self.lock:
            self._spawned.setdefault(ticket.origin.kind, []).append(ticket)
            self._comments.setdefault(ticket.id, [])

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def comments(self, ticket_id: UUID) -> list[TicketComment]:
        with self.lock:
            return list(self._comments.get(ticket_id, []))

    def insert_comment(self, comment: TicketComment) -> None:
        """Newest comments go to the front."""
        with self.lock:
            self._comments[comment.ticket_id].insert(0, comment)

    def replace_comment(self, comment: TicketComment) -> None:
        with self.lock:
            thread = self._comments[comment.ticket_id]
            for index, existing in enumerate(thread):
                if existing.id == comment.id:
                    thread[index] = comment
                    return
        raise KeyError(comment.id)

    def remove_comment(self, ticket_id: UUID, comment_id: UUID) -> None:
        with self.lock:
            thread = self._comments[ticket_id]
            self._comments[ticket_id] = [c for c in thread if c.id != comment_id]

    # -------------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------------

    def inventory(self) -> list[InventoryItem]:
        with self.lock:
            return list(self._inventory)

    def find_inventory_item(self, item_id: UUID) -> InventoryItem | None:
        with self.lock:
            return next((i for i in self._inventory if i.id == item_id), None)

    def replace_inventory_item(self, item: InventoryItem) -> None:
        with self.lock:
            self._inventory = [item if i.id == item.id else i for i in self._inventory]

    # -------------------------------------------------------------------------
    # Cleaning and supplies
    # -------------------------------------------------------------------------

    def cleaning(self) -> list[CleaningTask]:
        with self.lock:
            return list(self._cleaning)

    def find_cleaning_task(self, task_id: UUID) -> CleaningTask | None:
        with self.lock:
            return next((t for t in self._cleaning if t.id == task_id), None)

    def replace_cleaning_task(self, task: CleaningTask) -> None:
        with self.lock:
            self._cleaning = [task if t.id == task.id else t for t in self._cleaning]

    def supplies(self) -> list[SupplyItem]:
        with self.lock:
            return list(self._supplies)

    # -------------------------------------------------------------------------
    # Bulletins
    # -------------------------------------------------------------------------

    def bulletins(self) -> list[Bulletin]:
        with self.lock:
            return list(self._bulletins)

    def add_bulletin(self, bulletin: Bulletin) -> None:
        with self.lock:
            self._bulletins.append(bulletin)


def create_store(seed: StoreSeed | None = None) -> RecordStore:
    """
    Build a store from explicit seed data.

    Seed lists are copied so the caller's objects never become a second
    owner of store state.

    Args:
        seed: Initial records. None gives an empty store.

    Returns:
        Populated RecordStore
    """
    store = RecordStore()
    if seed is None:
        return store

    for pool in TicketPool:
        for ticket in getattr(seed, pool.value):
            store.add_ticket(pool, ticket)

    for kind, tickets in seed.spawned.items():
        for ticket in tickets:
            if ticket.origin.kind != kind:
                raise ValueError(
                    f"Spawned ticket {ticket.id} has origin {ticket.origin.kind.value}, "
                    f"seeded under {kind.value}"
                )
            store.add_spawned(ticket)

    for ticket_id, thread in seed.comments.items():
        if not store.has_ticket(ticket_id):
            raise ValueError(f"Seed comments reference unknown ticket {ticket_id}")
        for comment in reversed(thread):
            store.insert_comment(comment)

    store._inventory = list(seed.inventory)
    store._cleaning = list(seed.cleaning)
    store._supplies = list(seed.supplies)
    store._bulletins = list(seed.bulletins)

    logger.info(
        "Store seeded: %d tickets, %d inventory items, %d cleaning tasks",
        sum(len(store.tickets(pool)) for pool in TicketPool),
        len(seed.inventory),
        len(seed.cleaning),
    )
    return store
