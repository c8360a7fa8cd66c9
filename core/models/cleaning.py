"""Cleaning checklist and supply domain models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class CleaningTask(BaseModel):
    """
    A recurring cleaning checklist entry.

    `schedule` is a human description ("Disinfect every 2 hrs"), not a
    parsed recurrence. `last_done` and `completed_by` are only set while
    `done_today` is true.
    """

    id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    schedule: str = Field("", max_length=500)
    done_today: bool = False
    last_done: datetime | None = None
    completed_by: str | None = None
    due_time: datetime | None = None
    created_at: datetime

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def completion_matches_done_flag(self) -> "CleaningTask":
        """Completion details exist exactly when the task is done today."""
        if self.done_today and self.last_done is None:
            raise ValueError("A task done today must record when it was done")
        if not self.done_today and (self.last_done is not None or self.completed_by is not None):
            raise ValueError("A pending task cannot carry completion details")
        return self

    @property
    def status_label(self) -> str:
        return "Done" if self.done_today else "Pending"

    @property
    def due_warning(self) -> datetime | None:
        """Due time to call out, only while the task is still pending."""
        if self.done_today:
            return None
        return self.due_time


class SupplyItem(BaseModel):
    """A cleaning supply and what it is used for."""

    id: UUID
    name: str
    usage: str

    model_config = {"frozen": True}
