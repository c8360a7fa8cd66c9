"""Service fixtures over the seeded store."""

import pytest

from core.services.cleaning_service import CleaningService
from core.services.comment_service import CommentService
from core.services.dashboard_service import DashboardService
from core.services.inventory_service import InventoryService
from core.services.ticket_service import TicketService


@pytest.fixture
def ticket_service(store, audit, event_bus, config):
    return TicketService(store, audit, event_bus, config)


@pytest.fixture
def comment_service(store, audit, event_bus, config):
    return CommentService(store, audit, event_bus, config)


@pytest.fixture
def inventory_service(store, audit, event_bus, config):
    return InventoryService(store, audit, event_bus, config)


@pytest.fixture
def cleaning_service(store, audit, event_bus):
    return CleaningService(store, audit, event_bus)


@pytest.fixture
def dashboard_service(store, audit, event_bus, config):
    return DashboardService(store, audit, event_bus, config)
