"""
Comment service for ticket discussion threads.

A comment needs text or an attachment. Only its author may edit or
delete it; the check happens here, not in whatever UI hides the buttons.
"""

import logging
from uuid import UUID, uuid4

from core.audit import AuditLogger, AuditAction
from core.config import StoreConfig
from core.event_bus import EventBus
from core.events import StoreChanged
from core.exceptions import EmptyInputError, NotFoundError, UnauthorizedError
from core.models import TicketComment
from core.store import RecordStore
from utils.user_context import get_current_actor
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comment operations."""

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

    def post(
        self,
        ticket_id: UUID,
        text: str = "",
        image_data: bytes | None = None,
        author: str | None = None,
    ) -> TicketComment:
        """
        Post a comment at the top of a ticket's thread.

        Args:
            ticket_id: Ticket UUID
            text: Comment text (trimmed before storing)
            image_data: Optional attachment bytes
            author: Commenting user (defaults to current actor)

        Returns:
            Created comment

        Raises:
            EmptyInputError: If text is blank and there is no attachment
            NotFoundError: If ticket not found
            ValueError: If text is longer than the configured limit
        """
        author = author if author is not None else get_current_actor()
        image_data = image_data or None
        text = self._clean_text(text, image_data)

        comment = TicketComment(
            id=uuid4(),
            ticket_id=ticket_id,
            author=author,
            timestamp=now_utc(),
            text=text,
            image_data=image_data,
        )

        with self.store.lock:
            if not self.store.has_ticket(ticket_id):
                raise NotFoundError("ticket", ticket_id)
            self.store.insert_comment(comment)

        self._record(
            comment.id,
            AuditAction.CREATE,
            {"created": {
                "ticket_id": str(ticket_id),
                "author": author,
                "text": text,
                "has_attachment": image_data is not None,
            }},
            actor=author,
        )
        return comment

    def list_for_ticket(self, ticket_id: UUID) -> list[TicketComment]:
        """
        List a ticket's comments.

        Returns:
            Comments ordered newest first

        Raises:
            NotFoundError: If ticket not found
        """
        if not self.store.has_ticket(ticket_id):
            raise NotFoundError("ticket", ticket_id)
        return self.store.comments(ticket_id)

    def get_by_id(self, ticket_id: UUID, comment_id: UUID) -> TicketComment | None:
        return next(
            (c for c in self.store.comments(ticket_id) if c.id == comment_id),
            None,
        )

    def edit(
        self,
        ticket_id: UUID,
        comment_id: UUID,
        new_text: str,
        requesting_author: str | None = None,
    ) -> TicketComment:
        """
        Replace a comment's text. Id, timestamp and attachment are kept.

        Args:
            ticket_id: Ticket UUID
            comment_id: Comment UUID
            new_text: Replacement text
            requesting_author: Who is asking (defaults to current actor)

        Returns:
            Updated comment

        Raises:
            NotFoundError: If ticket or comment not found
            UnauthorizedError: If requester is not the comment's author
            EmptyInputError: If the edit would leave the comment empty
        """
        requesting_author = self._requester(requesting_author)

        with self.store.lock:
            current = self._resolve(ticket_id, comment_id)
            self._authorize(current, requesting_author)

            text = self._clean_text(new_text, current.image_data)
            updated = current.model_copy(update={"text": text})
            self.store.replace_comment(updated)

        if current.text != updated.text:
            self._record(
                comment_id,
                AuditAction.UPDATE,
                {"text": {"old": current.text, "new": updated.text}},
                actor=requesting_author,
            )
        return updated

    def delete(
        self,
        ticket_id: UUID,
        comment_id: UUID,
        requesting_author: str | None = None,
    ) -> None:
        """
        Remove a comment from its thread.

        Raises:
            NotFoundError: If ticket or comment not found
            UnauthorizedError: If requester is not the comment's author
        """
        requesting_author = self._requester(requesting_author)

        with self.store.lock:
            current = self._resolve(ticket_id, comment_id)
            self._authorize(current, requesting_author)
            self.store.remove_comment(ticket_id, comment_id)

        self._record(
            comment_id,
            AuditAction.DELETE,
            {"deleted": current.model_dump(mode="json", exclude={"image_data"})},
            actor=requesting_author,
        )

    def _requester(self, requesting_author: str | None) -> str:
        return requesting_author if requesting_author is not None else get_current_actor()

    def _resolve(self, ticket_id: UUID, comment_id: UUID) -> TicketComment:
        if not self.store.has_ticket(ticket_id):
            raise NotFoundError("ticket", ticket_id)
        comment = self.get_by_id(ticket_id, comment_id)
        if comment is None:
            raise NotFoundError("comment", comment_id)
        return comment

    def _authorize(self, comment: TicketComment, requesting_author: str) -> None:
        if comment.author != requesting_author:
            logger.warning(
                "Rejected change to comment %s by %s (author %s)",
                comment.id, requesting_author, comment.author,
            )
            raise UnauthorizedError(requesting_author, comment.author)

    def _clean_text(self, text: str, image_data: bytes | None) -> str:
        """Trim text and enforce the non-empty and length rules."""
        text = text.strip()
        if not text and not image_data:
            raise EmptyInputError("Comment needs text or an attachment")
        if len(text) > self.config.comment_max_length:
            raise ValueError(
                f"Comment is {len(text)} characters; the limit is {self.config.comment_max_length}"
            )
        return text

    def _record(self, comment_id: UUID, action: AuditAction, changes: dict, actor: str) -> None:
        self.audit.log_change(
            entity_type="comment",
            entity_id=comment_id,
            action=action,
            changes=changes,
            actor=actor,
        )
        if self.event_bus is not None:
            self.event_bus.publish(StoreChanged.create("comment", comment_id, action))
