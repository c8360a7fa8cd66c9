"""Typed exceptions for rejected store operations."""

from uuid import UUID


class StoreError(Exception):
    """Base class for operations the record store refuses."""


class NotFoundError(StoreError):
    """An operation targeted an id that does not resolve."""

    def __init__(self, entity_type: str, entity_id: UUID):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type.capitalize()} {entity_id} not found")


class UnauthorizedError(StoreError):
    """
    The requesting user may not change this record.

    Raised when someone other than a comment's author edits or deletes it.
    """

    def __init__(self, requesting_author: str, owner: str):
        self.requesting_author = requesting_author
        self.owner = owner
        super().__init__(
            f"{requesting_author or 'Anonymous'} cannot modify a comment written by {owner}"
        )


class EmptyInputError(StoreError):
    """Submission had no text after trimming and no attachment."""
