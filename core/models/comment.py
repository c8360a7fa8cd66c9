"""Ticket comment domain models."""

import base64
import binascii
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class CommentCreate(BaseModel):
    """
    Comment payload as received over the API.

    Attachments arrive base64-encoded and are decoded here. Whether the
    comment is empty is decided by CommentService, not by this model.
    """

    text: str = Field("", max_length=50000)
    image_data: bytes | None = None

    @field_validator("image_data", mode="before")
    @classmethod
    def decode_attachment(cls, value):
        """Decode base64 strings into raw bytes. An empty attachment counts as none."""
        if isinstance(value, str):
            try:
                value = base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError):
                raise ValueError("image_data must be base64-encoded")
        return value or None


class CommentUpdate(BaseModel):
    """Only the text of a comment can change."""

    text: str = Field(..., max_length=50000)


class TicketComment(BaseModel):
    """Full comment entity as stored."""

    id: UUID
    ticket_id: UUID
    author: str
    timestamp: datetime
    text: str
    image_data: bytes | None = None

    model_config = {"frozen": True, "ser_json_bytes": "base64"}

    @property
    def has_attachment(self) -> bool:
        return self.image_data is not None
