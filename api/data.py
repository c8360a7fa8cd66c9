"""GET /api/data: unified read endpoint."""

from uuid import UUID

from fastapi import APIRouter, Query, Request

from api.base import success_response
from core.exceptions import NotFoundError
from core.models import CleaningTask, OriginKind, Ticket, TicketPool
from core.queries import TicketFilter


VALID_TYPES = {
    "tickets", "inventory", "cleaning", "spawned", "supplies", "bulletins", "dashboard",
}


def create_data_router(services: dict) -> APIRouter:
    router = APIRouter()

    ticket_svc = services["ticket"]
    comment_svc = services["comment"]
    inventory_svc = services["inventory"]
    cleaning_svc = services["cleaning"]
    dashboard_svc = services["dashboard"]

    @router.get("/data")
    async def get_data(
        request: Request,
        type: str | None = Query(None),
        id: str | None = Query(None),
        search: str | None = Query(None),
        filter: str | None = Query(None),
        pool: str | None = Query(None),
        origin: str | None = Query(None),
        include: str | None = Query(None),
        grouped: bool = Query(False),
    ):
        if type is None:
            raise ValueError("'type' query parameter is required")

        if type not in VALID_TYPES:
            raise ValueError(f"Unknown type '{type}'. Valid types: {', '.join(sorted(VALID_TYPES))}")

        includes = set(include.split(",")) if include else set()
        request_id = getattr(request.state, "request_id", None)

        if type == "tickets":
            data = _handle_tickets(ticket_svc, comment_svc, id, pool, filter, search, includes)
        elif type == "inventory":
            data = _handle_inventory(inventory_svc, id, filter, grouped)
        elif type == "cleaning":
            data = _handle_cleaning(cleaning_svc, id)
        elif type == "spawned":
            data = _handle_spawned(ticket_svc, origin)
        elif type == "supplies":
            data = [s.model_dump(mode="json") for s in cleaning_svc.list_supplies()]
        elif type == "bulletins":
            data = [b.model_dump(mode="json") for b in dashboard_svc.list_bulletins()]
        else:
            data = dashboard_svc.summary().model_dump(mode="json")

        return success_response(data, request_id).model_dump(mode="json")

    return router


def ticket_payload(ticket: Ticket) -> dict:
    data = ticket.model_dump(mode="json")
    data["status_label"] = ticket.status_label
    return data


def cleaning_payload(task: CleaningTask) -> dict:
    data = task.model_dump(mode="json")
    data["status_label"] = task.status_label
    data["due_warning"] = task.due_warning.isoformat() if task.due_warning else None
    return data


def _handle_tickets(ticket_svc, comment_svc, id, pool, filter, search, includes):
    if id:
        ticket_id = UUID(id)
        ticket = ticket_svc.get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError("ticket", ticket_id)

        data = ticket_payload(ticket)
        if "comments" in includes:
            comments = comment_svc.list_for_ticket(ticket.id)
            data["comments"] = [c.model_dump(mode="json") for c in comments]
        return data

    if pool:
        return [ticket_payload(t) for t in ticket_svc.list_pool(TicketPool(pool))]

    ticket_filter = TicketFilter(filter) if filter else TicketFilter.ALL_OPEN
    return [ticket_payload(t) for t in ticket_svc.search(ticket_filter, search or "")]


def _handle_inventory(inventory_svc, id, filter, grouped):
    if id:
        item_id = UUID(id)
        item = inventory_svc.get_by_id(item_id)
        if item is None:
            raise NotFoundError("inventory item", item_id)
        return item.model_dump(mode="json")

    if grouped:
        return [
            {
                "category": category.value,
                "accent": category.accent,
                "items": [i.model_dump(mode="json") for i in items],
            }
            for category, items in inventory_svc.list_by_category()
        ]

    if filter == "out_of_stock":
        items = inventory_svc.list_out_of_stock()
    elif filter == "low_stock":
        items = inventory_svc.list_low_stock()
    elif filter is None:
        items = inventory_svc.list_all()
    else:
        raise ValueError("'inventory' filter must be 'out_of_stock' or 'low_stock'")

    return [i.model_dump(mode="json") for i in items]


def _handle_cleaning(cleaning_svc, id):
    if id:
        task_id = UUID(id)
        task = cleaning_svc.get_by_id(task_id)
        if task is None:
            raise NotFoundError("cleaning task", task_id)
        return cleaning_payload(task)

    return [cleaning_payload(t) for t in cleaning_svc.list_tasks()]


def _handle_spawned(ticket_svc, origin):
    if origin is None:
        raise ValueError("'spawned' type requires 'origin' parameter (inventory or cleaning)")

    kind = OriginKind(origin)
    if kind == OriginKind.MANUAL:
        raise ValueError("Manual tickets live on the main board; use type=tickets")

    return [ticket_payload(t) for t in ticket_svc.list_spawned(kind)]

