"""Dashboard service: home-screen counts and store bulletins."""

import logging
from datetime import datetime
from uuid import uuid4

from core.audit import AuditLogger, AuditAction
from core.config import StoreConfig
from core.event_bus import EventBus
from core.events import StoreChanged
from core.models import Bulletin, BulletinCreate, DashboardSummary, OriginKind
from core.queries import TicketFilter, filter_tickets, ticket_pool
from core.store import RecordStore
from utils.timezone import now_utc, to_local

logger = logging.getLogger(__name__)


def greeting_period(hour: int) -> str:
    """Part of the day for a 0-23 hour: morning, afternoon or evening."""
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    return "evening"


class DashboardService:
    """Service for dashboard reads and bulletins."""

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

    def summary(self, now: datetime | None = None) -> DashboardSummary:
        """
        Counts shown on the home screen.

        Args:
            now: Reference time for the greeting (defaults to now)

        Returns:
            Open tickets, out-of-stock items, open maintenance issues,
            greeting and bulletins
        """
        local_now = to_local(now or now_utc(), self.config.store_timezone)

        open_tickets = filter_tickets(ticket_pool(self.store), TicketFilter.ALL_OPEN)
        out_of_stock = [i for i in self.store.inventory() if i.out_of_stock]
        open_issues = [t for t in self.store.spawned(OriginKind.CLEANING) if t.is_active]

        return DashboardSummary(
            greeting=greeting_period(local_now.hour),
            open_ticket_count=len(open_tickets),
            out_of_stock_count=len(out_of_stock),
            open_issue_count=len(open_issues),
            bulletins=self.list_bulletins(),
        )

    def list_bulletins(self) -> list[Bulletin]:
        """Bulletins, newest first."""
        return sorted(self.store.bulletins(), key=lambda b: b.posted_at, reverse=True)

    def post_bulletin(self, data: BulletinCreate) -> Bulletin:
        """
        Post a store announcement.

        Args:
            data: Bulletin content

        Returns:
            Created bulletin
        """
        bulletin = Bulletin(
            id=uuid4(),
            title=data.title,
            body=data.body,
            posted_at=now_utc(),
        )
        self.store.add_bulletin(bulletin)

        logger.info("Posted bulletin %s", bulletin.id)
        self.audit.log_change(
            entity_type="bulletin",
            entity_id=bulletin.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json")},
        )
        if self.event_bus is not None:
            self.event_bus.publish(
                StoreChanged.create("bulletin", bulletin.id, AuditAction.CREATE)
            )
        return bulletin
