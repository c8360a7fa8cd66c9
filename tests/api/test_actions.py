"""Tests for POST /api/actions unified mutation endpoint."""

import base64
from uuid import uuid4

import pytest

from core.models import OriginKind, TicketPool


def act(client, domain: str, action: str, **data):
    return client.post("/api/actions", json={"domain": domain, "action": action, "data": data})


@pytest.fixture
def open_ticket(api_store):
    return api_store.tickets(TicketPool.UNASSIGNED)[0]


# =============================================================================
# ACTOR & VALIDATION
# =============================================================================


class TestActionsActor:

    def test_missing_actor_returns_401(self, anon_client):
        response = act(anon_client, "ticket", "create", task="Anonymous")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "ACTOR_REQUIRED"

    def test_unknown_domain(self, client):
        response = act(client, "payroll", "create")

        assert response.status_code == 400
        assert "Unknown domain" in response.json()["error"]["message"]

    def test_disallowed_action(self, client):
        response = act(client, "ticket", "delete", id=str(uuid4()))

        assert response.status_code == 400
        assert "not allowed" in response.json()["error"]["message"]

    def test_malformed_id(self, client):
        response = act(client, "ticket", "toggle_active", id="not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"


# =============================================================================
# TICKETS
# =============================================================================


class TestTicketActions:

    def test_create(self, client, api_store):
        response = act(client, "ticket", "create", task="Mop aisle 3", description="Spill")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["task"] == "Mop aisle 3"
        assert body["data"]["status_label"] == "Active"
        assert body["data"]["origin"] == {"kind": "manual", "source_id": None}
        assert api_store.tickets(TicketPool.UNASSIGNED)[-1].task == "Mop aisle 3"

    def test_create_rejects_bad_email(self, client):
        response = act(client, "ticket", "create", assigned_to_email="nope")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_create_rejects_off_roster_assignee(self, client):
        response = act(client, "ticket", "create", assigned_to_email="stranger@example.com")

        assert response.status_code == 400

    def test_update(self, client, open_ticket):
        response = act(
            client, "ticket", "update",
            id=str(open_ticket.id), assigned_to_email="employee2@example.com",
        )

        assert response.status_code == 200
        assert response.json()["data"]["assigned_to_email"] == "employee2@example.com"
        assert response.json()["data"]["task"] == open_ticket.task

    def test_update_missing_ticket(self, client):
        response = act(client, "ticket", "update", id=str(uuid4()), task="Ghost")

        assert response.status_code == 404

    def test_toggle_active(self, client, open_ticket):
        response = act(client, "ticket", "toggle_active", id=str(open_ticket.id))

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False
        assert response.json()["data"]["status_label"] == "Closed"

    def test_toggle_missing_returns_404(self, client):
        response = act(client, "ticket", "toggle_active", id=str(uuid4()))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_id_required(self, client):
        response = act(client, "ticket", "toggle_active")

        assert response.status_code == 400
        assert "'id' is required" in response.json()["error"]["message"]


# =============================================================================
# COMMENTS
# =============================================================================


class TestCommentActions:

    def test_post_uses_actor_as_author(self, client, open_ticket):
        response = act(client, "comment", "post", ticket_id=str(open_ticket.id), text=" hello ")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["author"] == "bob@example.com"
        assert data["text"] == "hello"
        assert data["image_data"] is None

    def test_post_attachment_only(self, client, open_ticket):
        encoded = base64.b64encode(b"\x89PNG").decode()

        response = act(
            client, "comment", "post",
            ticket_id=str(open_ticket.id), text="", image_data=encoded,
        )

        assert response.status_code == 200
        assert response.json()["data"]["image_data"] is not None

    def test_post_empty_rejected(self, client, open_ticket):
        response = act(client, "comment", "post", ticket_id=str(open_ticket.id), text="   ")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "EMPTY_INPUT"

    def test_post_blank_with_empty_attachment_rejected(self, client, api_store, open_ticket):
        response = act(
            client, "comment", "post",
            ticket_id=str(open_ticket.id), text="   ", image_data="",
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "EMPTY_INPUT"
        assert api_store.comments(open_ticket.id) == []

    def test_post_invalid_base64(self, client, open_ticket):
        response = act(
            client, "comment", "post",
            ticket_id=str(open_ticket.id), image_data="***",
        )

        assert response.status_code == 422

    def test_edit_by_author(self, client, open_ticket):
        posted = act(client, "comment", "post", ticket_id=str(open_ticket.id), text="v1").json()

        response = act(
            client, "comment", "edit",
            ticket_id=str(open_ticket.id), id=posted["data"]["id"], text="v2",
        )

        assert response.status_code == 200
        assert response.json()["data"]["text"] == "v2"
        assert response.json()["data"]["timestamp"] == posted["data"]["timestamp"]

    def test_edit_by_other_user_forbidden(self, client, jane_client, open_ticket):
        posted = act(client, "comment", "post", ticket_id=str(open_ticket.id), text="mine").json()

        response = act(
            jane_client, "comment", "edit",
            ticket_id=str(open_ticket.id), id=posted["data"]["id"], text="hijacked",
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTHORIZATION_DENIED"

    def test_delete_by_author(self, client, api_store, open_ticket):
        posted = act(client, "comment", "post", ticket_id=str(open_ticket.id), text="bye").json()

        response = act(
            client, "comment", "delete",
            ticket_id=str(open_ticket.id), id=posted["data"]["id"],
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"deleted": True}
        assert api_store.comments(open_ticket.id) == []

    def test_delete_by_other_user_forbidden(self, client, jane_client, api_store, open_ticket):
        posted = act(client, "comment", "post", ticket_id=str(open_ticket.id), text="keep").json()

        response = act(
            jane_client, "comment", "delete",
            ticket_id=str(open_ticket.id), id=posted["data"]["id"],
        )

        assert response.status_code == 403
        assert len(api_store.comments(open_ticket.id)) == 1

    def test_unknown_ticket(self, client):
        response = act(client, "comment", "post", ticket_id=str(uuid4()), text="hello")

        assert response.status_code == 404


# =============================================================================
# INVENTORY, CLEANING, BULLETINS
# =============================================================================


class TestInventoryActions:

    def test_toggle_out_of_stock(self, client, api_store):
        item = api_store.inventory()[0]

        response = act(client, "inventory", "toggle_out_of_stock", id=str(item.id))

        assert response.status_code == 200
        assert response.json()["data"]["out_of_stock"] is (not item.out_of_stock)

    def test_raise_issue_spawns_ticket(self, client, api_store):
        item = api_store.inventory()[0]

        response = act(client, "inventory", "raise_issue", id=str(item.id))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["task"] == f"Issue with {item.name}"
        assert data["origin"] == {"kind": "inventory", "source_id": str(item.id)}
        assert len(api_store.spawned(OriginKind.INVENTORY)) == 1

    def test_raise_issue_unknown_item(self, client):
        response = act(client, "inventory", "raise_issue", id=str(uuid4()))

        assert response.status_code == 404


class TestCleaningActions:

    def test_toggle_done_records_actor(self, client, api_store):
        pending = next(t for t in api_store.cleaning() if not t.done_today)

        response = act(client, "cleaning", "toggle_done", id=str(pending.id))

        data = response.json()["data"]
        assert data["done_today"] is True
        assert data["completed_by"] == "bob@example.com"
        assert data["status_label"] == "Done"
        assert data["due_warning"] is None

    def test_raise_issue(self, client, api_store):
        task = api_store.cleaning()[0]

        response = act(client, "cleaning", "raise_issue", id=str(task.id))

        assert response.json()["data"]["origin"]["kind"] == "cleaning"
        assert len(api_store.spawned(OriginKind.CLEANING)) == 4


class TestBulletinActions:

    def test_post(self, client, api_store):
        response = act(client, "bulletin", "post", title="Holiday hours", body="Closed Monday")

        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Holiday hours"
        assert len(api_store.bulletins()) == 4

    def test_title_required(self, client):
        response = act(client, "bulletin", "post", title="")

        assert response.status_code == 422
