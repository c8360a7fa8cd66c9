"""Tests for CleaningService."""

import pytest
from uuid import uuid4

from core.exceptions import NotFoundError
from core.models import OriginKind
from core.services.cleaning_service import RAISED_FROM_CLEANING


@pytest.fixture
def pending_task(cleaning_service):
    return next(t for t in cleaning_service.list_tasks() if not t.done_today)


@pytest.fixture
def done_task(cleaning_service):
    return next(t for t in cleaning_service.list_tasks() if t.done_today)


class TestToggleDone:
    """Tests for CleaningService.toggle_done."""

    def test_marking_done_stamps_time(self, cleaning_service, pending_task):
        """last_done is set and not before the task was created."""
        updated = cleaning_service.toggle_done(pending_task.id)

        assert updated.done_today is True
        assert updated.last_done is not None
        assert updated.last_done >= pending_task.created_at

    def test_marking_done_records_actor(self, cleaning_service, pending_task, as_bob):
        updated = cleaning_service.toggle_done(pending_task.id)

        assert updated.completed_by == as_bob

    def test_marking_pending_clears_completion(self, cleaning_service, done_task):
        updated = cleaning_service.toggle_done(done_task.id)

        assert updated.done_today is False
        assert updated.last_done is None
        assert updated.completed_by is None

    def test_every_task_round_trips(self, cleaning_service):
        """Two toggles restore the done flag; pending always clears last_done."""
        for task in cleaning_service.list_tasks():
            once = cleaning_service.toggle_done(task.id)
            twice = cleaning_service.toggle_done(task.id)

            assert twice.done_today == task.done_today
            for state in (once, twice):
                if not state.done_today:
                    assert state.last_done is None

    def test_due_warning_only_while_pending(self, cleaning_service, pending_task):
        """Due time is called out for pending tasks only."""
        assert pending_task.due_warning == pending_task.due_time

        done = cleaning_service.toggle_done(pending_task.id)

        assert done.due_warning is None
        assert done.status_label == "Done"

    def test_missing_id_is_noop(self, cleaning_service, published):
        before = cleaning_service.list_tasks()

        assert cleaning_service.toggle_done(uuid4()) is None
        assert cleaning_service.list_tasks() == before
        assert published == []


class TestRaiseIssue:
    """Tests for CleaningService.raise_issue."""

    def test_spawns_maintenance_issue(self, cleaning_service, done_task):
        before = len(cleaning_service.list_issues())

        ticket = cleaning_service.raise_issue(done_task.id)

        assert ticket.task == f"Issue with {done_task.title}"
        assert ticket.description == RAISED_FROM_CLEANING
        assert ticket.origin.kind == OriginKind.CLEANING
        assert ticket.origin.source_id == done_task.id
        assert len(cleaning_service.list_issues()) == before + 1
        assert cleaning_service.get_by_id(done_task.id) == done_task

    def test_unknown_task(self, cleaning_service):
        with pytest.raises(NotFoundError, match="Cleaning task"):
            cleaning_service.raise_issue(uuid4())


class TestSupplies:

    def test_lists_seeded_supplies(self, cleaning_service):
        names = [s.name for s in cleaning_service.list_supplies()]

        assert names[0] == "Windex"
        assert len(names) == 4
