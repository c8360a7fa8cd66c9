"""
Read-only views derived from the record store.

Nothing here mutates its inputs; every function returns a new list.
"""

from enum import Enum
from typing import Iterable, Sequence, TypeVar

from core.models import Ticket, TicketPool
from core.store import RecordStore

T = TypeVar("T")
C = TypeVar("C")


class TicketFilter(str, Enum):
    """Mutually exclusive ticket list filters."""

    ASSIGNED = "assigned"
    ALL_OPEN = "all_open"
    CLOSED = "closed"
    UNASSIGNED = "unassigned"


_PREDICATES = {
    TicketFilter.ASSIGNED: lambda t: t.is_assigned,
    TicketFilter.ALL_OPEN: lambda t: t.is_active,
    TicketFilter.CLOSED: lambda t: not t.is_active,
    TicketFilter.UNASSIGNED: lambda t: not t.is_assigned and t.is_active,
}

# Concatenation order for the combined ticket list
_POOL_ORDER = (TicketPool.ASSIGNED, TicketPool.UNASSIGNED, TicketPool.PAST)


def ticket_pool(store: RecordStore) -> list[Ticket]:
    """All main tickets: assigned, then unassigned, then past."""
    tickets: list[Ticket] = []
    for pool in _POOL_ORDER:
        tickets.extend(store.tickets(pool))
    return tickets


def matches_search(ticket: Ticket, search_text: str) -> bool:
    """Case-insensitive substring match on title or description."""
    needle = search_text.casefold()
    return needle in ticket.task.casefold() or needle in ticket.description.casefold()


def filter_tickets(
    pool: Iterable[Ticket],
    filter: TicketFilter,
    search_text: str = ""
) -> list[Ticket]:
    """
    Apply one status filter, then an optional text search.

    Args:
        pool: Tickets to filter, usually ticket_pool(store)
        filter: Which of the four filters to apply
        search_text: Substring to look for. Surrounding whitespace is
            stripped first, so "fix " matches "fixed"; blank means no search

    Returns:
        Matching tickets in pool order
    """
    predicate = _PREDICATES[TicketFilter(filter)]
    needle = search_text.strip()

    result = [t for t in pool if predicate(t)]
    if needle:
        result = [t for t in result if matches_search(t, needle)]
    return result


def group_by_category(
    items: Iterable[T],
    categories: Sequence[C],
) -> list[tuple[C, list[T]]]:
    """
    Group items by their `category` attribute in the declared category order.

    Every category appears in the result, empty ones with an empty list, so
    screens render a stable set of sections. Items whose category is not
    listed are left out.
    """
    buckets: dict[C, list[T]] = {category: [] for category in categories}
    for item in items:
        bucket = buckets.get(getattr(item, "category"))
        if bucket is not None:
            bucket.append(item)
    return [(category, buckets[category]) for category in categories]
