"""Shared test fixtures for the store test suite."""

from datetime import datetime, timezone

import pytest

from core.audit import AuditLogger
from core.config import StoreConfig
from core.event_bus import EventBus
from core.seed import sample_seed
from core.store import create_store
from utils.user_context import actor_context, clear_current_actor


# =============================================================================
# TEST ACTOR CONSTANTS
# =============================================================================

# Primary actor - use for single-user tests
BOB = "bob@example.com"

# Secondary actor - use for authorization tests
JANE = "jane@example.com"

# Fixed reference time (a Tuesday, 10:00 UTC)
REFERENCE_NOW = datetime(2025, 4, 29, 10, 0, tzinfo=timezone.utc)


# =============================================================================
# ACTOR CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_actor_context():
    """Ensure clean actor context before and after each test."""
    clear_current_actor()
    yield
    clear_current_actor()


@pytest.fixture
def as_bob():
    """Act as the primary test user."""
    with actor_context(BOB):
        yield BOB


@pytest.fixture
def as_jane():
    """Act as the secondary test user."""
    with actor_context(JANE):
        yield JANE


# =============================================================================
# STORE FIXTURES
# =============================================================================


@pytest.fixture
def config() -> StoreConfig:
    return StoreConfig(employees=["employee1@example.com", "employee2@example.com",
                                  "employee3@example.com", BOB, JANE])


@pytest.fixture
def store():
    """Store seeded with the sample records."""
    return create_store(sample_seed(REFERENCE_NOW))


@pytest.fixture
def empty_store():
    return create_store()


@pytest.fixture
def audit():
    return AuditLogger()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def published(event_bus):
    """Every StoreChanged event published during the test."""
    events = []
    event_bus.subscribe("StoreChanged", events.append)
    return events
