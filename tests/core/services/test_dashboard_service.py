"""Tests for DashboardService."""

from datetime import datetime, timezone

import pytest

from core.config import StoreConfig
from core.models import BulletinCreate, TicketCreate
from core.services.dashboard_service import DashboardService, greeting_period


class TestGreetingPeriod:

    @pytest.mark.parametrize("hour,expected", [
        (0, "evening"), (4, "evening"), (5, "morning"), (11, "morning"),
        (12, "afternoon"), (17, "afternoon"), (18, "evening"), (23, "evening"),
    ])
    def test_boundaries(self, hour, expected):
        assert greeting_period(hour) == expected


class TestSummary:
    """Tests for DashboardService.summary."""

    def test_counts_seeded_store(self, dashboard_service):
        """Seed has four open tickets, two OOS items, three open issues."""
        summary = dashboard_service.summary(datetime(2025, 4, 29, 9, tzinfo=timezone.utc))

        assert summary.open_ticket_count == 4
        assert summary.out_of_stock_count == 2
        assert summary.open_issue_count == 3
        assert summary.greeting == "morning"
        assert len(summary.bulletins) == 3

    def test_tracks_mutations(self, dashboard_service, ticket_service, cleaning_service):
        ticket_service.create(TicketCreate(task="Another"))
        issue = cleaning_service.list_issues()[0]
        ticket_service.toggle_active(issue.id)

        summary = dashboard_service.summary()

        assert summary.open_ticket_count == 5
        assert summary.open_issue_count == 2

    def test_greeting_uses_store_timezone(self, store, audit):
        """17:00 UTC is morning in Los Angeles."""
        service = DashboardService(
            store, audit, config=StoreConfig(store_timezone="America/Los_Angeles")
        )

        summary = service.summary(datetime(2025, 4, 29, 17, tzinfo=timezone.utc))

        assert summary.greeting == "morning"


class TestBulletins:

    def test_post_then_list_newest_first(self, dashboard_service):
        bulletin = dashboard_service.post_bulletin(
            BulletinCreate(title="Inventory night", body="Counts start at 8.")
        )

        assert dashboard_service.list_bulletins()[0] == bulletin

    def test_title_required(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            BulletinCreate(title="")
