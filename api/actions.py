"""POST /api/actions: unified mutation endpoint."""

from uuid import UUID

from fastapi import APIRouter, Request
from pydantic import BaseModel

from api.base import success_response
from api.data import cleaning_payload, ticket_payload
from core.exceptions import NotFoundError
from core.models import (
    BulletinCreate,
    CommentCreate,
    CommentUpdate,
    TicketCreate,
    TicketUpdate,
)


class ActionRequest(BaseModel):
    domain: str
    action: str
    data: dict


def create_actions_router(services: dict) -> APIRouter:
    router = APIRouter()

    handlers = {
        "ticket": TicketHandler(services["ticket"]),
        "comment": CommentHandler(services["comment"]),
        "inventory": InventoryHandler(services["inventory"]),
        "cleaning": CleaningHandler(services["cleaning"]),
        "bulletin": BulletinHandler(services["dashboard"]),
    }

    @router.post("/actions")
    async def perform_action(request: Request, body: ActionRequest):
        handler = handlers.get(body.domain)
        if handler is None:
            raise ValueError(
                f"Unknown domain '{body.domain}'. "
                f"Valid domains: {', '.join(sorted(handlers.keys()))}"
            )

        if body.action not in handler.ALLOWED_ACTIONS:
            raise ValueError(
                f"Action '{body.action}' not allowed on '{body.domain}'. "
                f"Allowed: {', '.join(sorted(handler.ALLOWED_ACTIONS))}"
            )

        method = getattr(handler, f"_handle_{body.action}")
        result = method(dict(body.data))
        request_id = getattr(request.state, "request_id", None)
        return success_response(result, request_id).model_dump(mode="json")

    return router


def _require_id(data: dict, key: str = "id") -> UUID:
    if key not in data:
        raise ValueError(f"'{key}' is required")
    return UUID(str(data.pop(key)))


# =============================================================================
# HANDLER CLASSES
# =============================================================================


class TicketHandler:
    ALLOWED_ACTIONS = {"create", "update", "toggle_active"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        ticket = self.service.create(TicketCreate(**data))
        return ticket_payload(ticket)

    def _handle_update(self, data: dict):
        ticket_id = _require_id(data)
        ticket = self.service.update(ticket_id, TicketUpdate(**data))
        return ticket_payload(ticket)

    def _handle_toggle_active(self, data: dict):
        ticket_id = _require_id(data)
        ticket = self.service.toggle_active(ticket_id)
        if ticket is None:
            raise NotFoundError("ticket", ticket_id)
        return ticket_payload(ticket)


class CommentHandler:
    ALLOWED_ACTIONS = {"post", "edit", "delete"}

    def __init__(self, service):
        self.service = service

    def _handle_post(self, data: dict):
        ticket_id = _require_id(data, "ticket_id")
        payload = CommentCreate(**data)
        comment = self.service.post(ticket_id, payload.text, payload.image_data)
        return comment.model_dump(mode="json")

    def _handle_edit(self, data: dict):
        ticket_id = _require_id(data, "ticket_id")
        comment_id = _require_id(data)
        payload = CommentUpdate(**data)
        comment = self.service.edit(ticket_id, comment_id, payload.text)
        return comment.model_dump(mode="json")

    def _handle_delete(self, data: dict):
        ticket_id = _require_id(data, "ticket_id")
        comment_id = _require_id(data)
        self.service.delete(ticket_id, comment_id)
        return {"deleted": True}


class InventoryHandler:
    ALLOWED_ACTIONS = {"toggle_out_of_stock", "raise_issue"}

    def __init__(self, service):
        self.service = service

    def _handle_toggle_out_of_stock(self, data: dict):
        item_id = _require_id(data)
        item = self.service.toggle_out_of_stock(item_id)
        if item is None:
            raise NotFoundError("inventory item", item_id)
        return item.model_dump(mode="json")

    def _handle_raise_issue(self, data: dict):
        ticket = self.service.raise_issue(_require_id(data))
        return ticket_payload(ticket)


class CleaningHandler:
    ALLOWED_ACTIONS = {"toggle_done", "raise_issue"}

    def __init__(self, service):
        self.service = service

    def _handle_toggle_done(self, data: dict):
        task_id = _require_id(data)
        task = self.service.toggle_done(task_id)
        if task is None:
            raise NotFoundError("cleaning task", task_id)
        return cleaning_payload(task)

    def _handle_raise_issue(self, data: dict):
        ticket = self.service.raise_issue(_require_id(data))
        return ticket_payload(ticket)


class BulletinHandler:
    ALLOWED_ACTIONS = {"post"}

    def __init__(self, service):
        self.service = service

    def _handle_post(self, data: dict):
        bulletin = self.service.post_bulletin(BulletinCreate(**data))
        return bulletin.model_dump(mode="json")
