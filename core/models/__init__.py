"""Core domain models."""

from core.models.ticket import (
    Ticket, TicketCreate, TicketUpdate, TicketPool, TicketOrigin, OriginKind,
)
from core.models.comment import TicketComment, CommentCreate, CommentUpdate
from core.models.inventory import InventoryItem, InventoryCategory
from core.models.cleaning import CleaningTask, SupplyItem
from core.models.bulletin import Bulletin, BulletinCreate, DashboardSummary

__all__ = [
    # Ticket
    "Ticket", "TicketCreate", "TicketUpdate", "TicketPool", "TicketOrigin", "OriginKind",
    # Comment
    "TicketComment", "CommentCreate", "CommentUpdate",
    # Inventory
    "InventoryItem", "InventoryCategory",
    # Cleaning
    "CleaningTask", "SupplyItem",
    # Bulletin / dashboard
    "Bulletin", "BulletinCreate", "DashboardSummary",
]
