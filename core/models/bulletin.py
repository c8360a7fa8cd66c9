"""Store bulletin and dashboard models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class BulletinCreate(BaseModel):
    """Data required to post a bulletin."""

    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field("", max_length=5000)


class Bulletin(BaseModel):
    """A store announcement."""

    id: UUID
    title: str
    body: str
    posted_at: datetime

    model_config = {"frozen": True}


class DashboardSummary(BaseModel):
    """Counts and announcements shown on the home screen."""

    greeting: str
    open_ticket_count: int
    out_of_stock_count: int
    open_issue_count: int
    bulletins: list[Bulletin]
