"""
Tests for agenda item endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from huddle.models.agenda_item import AgendaItem
from huddle.models.audit_log import AuditLog
from huddle.models.profile import Profile


class TestSubmitAgendaItem:
    """Tests for submitting agenda items."""

    def test_submit_success(self, authenticated_client: TestClient, test_user: Profile):
        """Test a submission with no tags starts out pending."""
        response = authenticated_client.post(
            "/api/v1/agenda-items",
            json={"title": "Q3 roadmap"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Q3 roadmap"
        assert data["status"] == "pending"
        assert data["description"] is None
        assert data["submitted_by"] == str(test_user.id)
        assert data["submitter_name"] == "Test User"
        assert data["tags"] == []

    def test_submit_with_tags(
        self, authenticated_client: TestClient, other_user: Profile
    ):
        """Test tagged team members are returned with their names."""
        response = authenticated_client.post(
            "/api/v1/agenda-items",
            json={
                "title": "Release checklist",
                "description": "Go through the release steps",
                "tagged_user_ids": [str(other_user.id)],
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["tags"] == [
            {"user_id": str(other_user.id), "display_name": "Other User"}
        ]

    def test_submit_empty_title(self, authenticated_client: TestClient, db: Session):
        """Test an empty title is rejected and nothing is created."""
        response = authenticated_client.post("/api/v1/agenda-items", json={"title": ""})
        assert response.status_code == 422
        assert db.query(AgendaItem).count() == 0

    def test_submit_whitespace_title(self, authenticated_client: TestClient, db: Session):
        response = authenticated_client.post("/api/v1/agenda-items", json={"title": "   "})
        assert response.status_code == 422
        assert "title" in response.json()["detail"].lower()
        assert db.query(AgendaItem).count() == 0

    def test_submit_missing_title(self, authenticated_client: TestClient):
        response = authenticated_client.post("/api/v1/agenda-items", json={})
        assert response.status_code == 422
        assert "errors" in response.json()

    def test_submit_unknown_tag(self, authenticated_client: TestClient):
        fake_id = "00000000-0000-0000-0000-000000000000"
        response = authenticated_client.post(
            "/api/v1/agenda-items",
            json={"title": "Release checklist", "tagged_user_ids": [fake_id]},
        )
        assert response.status_code == 422

    def test_submit_is_audited(self, authenticated_client: TestClient, db: Session):
        response = authenticated_client.post(
            "/api/v1/agenda-items", json={"title": "Q3 roadmap"}
        )
        assert response.status_code == 201

        log = db.query(AuditLog).filter(AuditLog.action == "submit_agenda_item").one()
        assert log.target_id == response.json()["id"]

    def test_submit_unauthenticated(self, client: TestClient):
        """Test that unauthenticated users cannot submit items."""
        response = client.post("/api/v1/agenda-items", json={"title": "Q3 roadmap"})
        assert response.status_code == 401


class TestListAgendaItems:
    """Tests for listing agenda items."""

    def test_list_empty(self, authenticated_client: TestClient):
        response = authenticated_client.get("/api/v1/agenda-items")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_newest_first(
        self,
        authenticated_client: TestClient,
        pending_item: AgendaItem,
        second_pending_item: AgendaItem,
    ):
        response = authenticated_client.get("/api/v1/agenda-items")
        assert response.status_code == 200
        titles = [item["title"] for item in response.json()]
        assert titles == ["Hiring plan", "Q3 roadmap"]

    def test_submitted_item_first_in_pending(
        self, authenticated_client: TestClient, pending_item: AgendaItem
    ):
        created = authenticated_client.post(
            "/api/v1/agenda-items", json={"title": "Team offsite"}
        ).json()

        response = authenticated_client.get("/api/v1/agenda-items/pending")
        assert response.status_code == 200
        data = response.json()
        assert data[0]["id"] == created["id"]
        assert {item["status"] for item in data} == {"pending"}

    def test_list_unauthenticated(self, client: TestClient):
        response = client.get("/api/v1/agenda-items/pending")
        assert response.status_code == 401


class TestGetAgendaItem:
    """Tests for getting a single agenda item."""

    def test_get_success(self, authenticated_client: TestClient, pending_item: AgendaItem):
        response = authenticated_client.get(f"/api/v1/agenda-items/{pending_item.id}")
        assert response.status_code == 200
        assert response.json()["title"] == "Q3 roadmap"

    def test_get_not_found(self, authenticated_client: TestClient):
        fake_id = "00000000-0000-0000-0000-000000000000"
        response = authenticated_client.get(f"/api/v1/agenda-items/{fake_id}")
        assert response.status_code == 404

    def test_get_invalid_id(self, authenticated_client: TestClient):
        response = authenticated_client.get("/api/v1/agenda-items/invalid-id")
        assert response.status_code == 400
