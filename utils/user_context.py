"""Propagate the acting user's email through the call stack using contextvars."""

from contextvars import ContextVar
from contextlib import contextmanager

_current_actor: ContextVar[str | None] = ContextVar("current_actor", default=None)


def get_current_actor() -> str:
    """
    Get the acting user's email from context.

    Raises RuntimeError if no actor is set. Comment authorship and
    authorization depend on it, so a missing actor is a bug in the caller.
    """
    actor = _current_actor.get()
    if actor is None:
        raise RuntimeError(
            "No actor context set. Pass the author explicitly or call "
            "from inside actor_context()."
        )
    return actor


def peek_current_actor() -> str | None:
    """Acting user's email, or None when nobody is set."""
    return _current_actor.get()


def set_current_actor(email: str) -> None:
    """
    Set the acting user in context.

    Called by ActorMiddleware after reading the actor header.
    """
    _current_actor.set(email)


def clear_current_actor() -> None:
    """
    Clear the actor context.

    Must be called in a finally block to prevent context leakage.
    """
    _current_actor.set(None)


@contextmanager
def actor_context(email: str):
    """
    Context manager for temporarily acting as a user.

    Example:
        with actor_context("bob@example.com"):
            comment_service.post(ticket_id, text="still broken")
    """
    previous = _current_actor.get()
    set_current_actor(email)
    try:
        yield
    finally:
        if previous is None:
            clear_current_actor()
        else:
            set_current_actor(previous)
