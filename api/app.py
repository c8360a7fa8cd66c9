"""Application factory wiring the store, services and HTTP routes together."""

import logging

from fastapi import FastAPI, Request

from api.actions import create_actions_router
from api.base import success_response
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import ActorMiddleware, RequestIDMiddleware
from core.audit import AuditLogger
from core.config import StoreConfig, load_config
from core.event_bus import EventBus
from core.seed import sample_seed
from core.services.cleaning_service import CleaningService
from core.services.comment_service import CommentService
from core.services.dashboard_service import DashboardService
from core.services.inventory_service import InventoryService
from core.services.ticket_service import TicketService
from core.store import RecordStore, create_store

logger = logging.getLogger(__name__)


def build_services(
    store: RecordStore,
    config: StoreConfig,
    audit: AuditLogger | None = None,
    event_bus: EventBus | None = None,
) -> dict:
    """Construct every service over one store, keyed by domain name."""
    audit = audit or AuditLogger()
    event_bus = event_bus or EventBus()

    return {
        "ticket": TicketService(store, audit, event_bus, config),
        "comment": CommentService(store, audit, event_bus, config),
        "inventory": InventoryService(store, audit, event_bus, config),
        "cleaning": CleaningService(store, audit, event_bus),
        "dashboard": DashboardService(store, audit, event_bus, config),
    }


def create_app(
    store: RecordStore | None = None,
    config: StoreConfig | None = None,
    services: dict | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Store to serve (defaults to a new one, seeded per config)
        config: Configuration (defaults to load_config())
        services: Prebuilt services; built over `store` when omitted

    Returns:
        Configured FastAPI app
    """
    config = config or load_config()
    if store is None:
        store = create_store(sample_seed() if config.seed_sample_data else None)
    services = services or build_services(store, config)

    app = FastAPI(title=config.app_name)
    app.add_middleware(ActorMiddleware, header_name=config.actor_header)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")

    @app.get("/health")
    async def health(request: Request):
        request_id = getattr(request.state, "request_id", None)
        return success_response({"status": "ok"}, request_id).model_dump(mode="json")

    app.state.store = store
    app.state.services = services
    logger.info("%s API ready", config.app_name)
    return app
