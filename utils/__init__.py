"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, to_local, days_ago, today_at
from utils.user_context import (
    get_current_actor,
    peek_current_actor,
    set_current_actor,
    clear_current_actor,
    actor_context,
)
