"""Inventory service: stock flags and issue tickets raised from items."""

import logging
from uuid import UUID, uuid4

from core.audit import AuditLogger, AuditAction
from core.config import StoreConfig
from core.event_bus import EventBus
from core.events import StoreChanged
from core.exceptions import NotFoundError
from core.models import InventoryCategory, InventoryItem, OriginKind, Ticket, TicketOrigin
from core.queries import group_by_category
from core.store import RecordStore
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

RAISED_FROM_INVENTORY = "Raised from Inventory"


class InventoryService:
    """Service for inventory operations."""

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

    def get_by_id(self, item_id: UUID) -> InventoryItem | None:
        return self.store.find_inventory_item(item_id)

    def list_all(self) -> list[InventoryItem]:
        return self.store.inventory()

    def list_by_category(self) -> list[tuple[InventoryCategory, list[InventoryItem]]]:
        """Items grouped into every category, in category order."""
        return group_by_category(self.store.inventory(), list(InventoryCategory))

    def list_out_of_stock(self) -> list[InventoryItem]:
        return [i for i in self.store.inventory() if i.out_of_stock]

    def list_low_stock(self) -> list[InventoryItem]:
        """Items counted below the configured reorder threshold."""
        threshold = self.config.low_stock_threshold
        return [i for i in self.store.inventory() if i.is_low_stock(threshold)]

    def toggle_out_of_stock(self, item_id: UUID) -> InventoryItem | None:
        """
        Flip an item's out-of-stock flag.

        Args:
            item_id: Inventory item UUID

        Returns:
            Updated item, or None if no item has this id (nothing changes)
        """
        with self.store.lock:
            current = self.store.find_inventory_item(item_id)
            if current is None:
                logger.warning("toggle_out_of_stock ignored: item %s not found", item_id)
                return None

            updated = current.model_copy(update={"out_of_stock": not current.out_of_stock})
            self.store.replace_inventory_item(updated)

        self.audit.log_change(
            entity_type="inventory_item",
            entity_id=item_id,
            action=AuditAction.UPDATE,
            changes={"out_of_stock": {"old": current.out_of_stock, "new": updated.out_of_stock}},
        )
        self._publish("inventory_item", item_id, AuditAction.UPDATE)
        return updated

    def raise_issue(self, item_id: UUID) -> Ticket:
        """
        Raise an issue ticket against an inventory item.

        The ticket goes to the inventory screen's own list, not the main
        ticket board. The item itself is left untouched.

        Args:
            item_id: Inventory item UUID

        Returns:
            The spawned ticket

        Raises:
            NotFoundError: If item not found
        """
        with self.store.lock:
            item = self.store.find_inventory_item(item_id)
            if item is None:
                raise NotFoundError("inventory item", item_id)

            ticket = Ticket(
                id=uuid4(),
                task=f"Issue with {item.name}",
                description=RAISED_FROM_INVENTORY,
                assigned_to_email="",
                is_active=True,
                origin=TicketOrigin(kind=OriginKind.INVENTORY, source_id=item.id),
                created_at=now_utc(),
            )
            self.store.add_spawned(ticket)

        logger.info("Raised ticket %s from inventory item %s", ticket.id, item_id)
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
