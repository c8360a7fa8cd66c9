"""Ticket domain models."""

from datetime import datetime
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator


class TicketPool(str, Enum):
    """Positional bucket a main ticket lives in."""

    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    PAST = "past"


class OriginKind(str, Enum):
    """Where a ticket was raised from."""

    MANUAL = "manual"
    INVENTORY = "inventory"
    CLEANING = "cleaning"


class TicketOrigin(BaseModel):
    """Provenance of a ticket: the screen and record it was raised from."""

    kind: OriginKind = OriginKind.MANUAL
    source_id: UUID | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def manual_has_no_source(self) -> "TicketOrigin":
        """Manual tickets are not tied to another record."""
        if self.kind == OriginKind.MANUAL and self.source_id is not None:
            raise ValueError("Manual tickets cannot reference a source record")
        return self


class TicketCreate(BaseModel):
    """Data for a new ticket. Every field has a default; an empty title is allowed."""

    task: str = Field("", max_length=255)
    description: str = Field("", max_length=10000)
    assigned_to_email: EmailStr | Literal[""] = ""
    is_active: bool = True


class TicketUpdate(BaseModel):
    """Data that can be updated on a ticket. All fields optional."""

    task: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=10000)
    assigned_to_email: EmailStr | Literal[""] | None = None
    is_active: bool | None = None


class Ticket(BaseModel):
    """Full ticket entity as stored."""

    id: UUID
    task: str
    description: str
    assigned_to_email: str
    is_active: bool
    origin: TicketOrigin = TicketOrigin()
    created_at: datetime

    model_config = {"frozen": True}

    @property
    def is_assigned(self) -> bool:
        """An empty assignee string means nobody owns the ticket."""
        return self.assigned_to_email != ""

    @property
    def status_label(self) -> str:
        return "Active" if self.is_active else "Closed"
