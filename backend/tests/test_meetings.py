"""
Tests for meeting endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from huddle.models.agenda_item import AgendaItem
from huddle.models.meeting import Meeting
from huddle.models.meeting_agenda_item import MeetingAgendaItem


class TestCreateMeeting:
    """Tests for creating meetings."""

    def test_create_meeting_success(self, authenticated_client: TestClient):
        """Test a new meeting keeps its timestamp and has an empty agenda."""
        response = authenticated_client.post(
            "/api/v1/meetings",
            json={"title": "Weekly Sync", "date": "2024-01-10", "time": "09:00"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Weekly Sync"
        assert data["date"].startswith("2024-01-10T09:00:00")
        assert data["total_minutes"] == 0
        assert data["agenda_items"] == []

        listed = authenticated_client.get("/api/v1/meetings").json()
        assert [m["id"] for m in listed] == [data["id"]]
        assert listed[0]["date"].startswith("2024-01-10T09:00:00")
        assert listed[0]["total_minutes"] == 0

    def test_create_meeting_missing_time(self, authenticated_client: TestClient, db: Session):
        response = authenticated_client.post(
            "/api/v1/meetings", json={"title": "Weekly Sync", "date": "2024-01-10"}
        )
        assert response.status_code == 422
        assert db.query(Meeting).count() == 0

    def test_create_meeting_blank_title(self, authenticated_client: TestClient):
        response = authenticated_client.post(
            "/api/v1/meetings",
            json={"title": "  ", "date": "2024-01-10", "time": "09:00"},
        )
        assert response.status_code == 422

    def test_create_meeting_unauthenticated(self, client: TestClient):
        response = client.post(
            "/api/v1/meetings",
            json={"title": "Weekly Sync", "date": "2024-01-10", "time": "09:00"},
        )
        assert response.status_code == 401


class TestListMeetings:
    """Tests for listing meetings."""

    def test_list_newest_date_first(self, authenticated_client: TestClient):
        for title, day in [("Kickoff", "2024-01-03"), ("Weekly Sync", "2024-01-10")]:
            authenticated_client.post(
                "/api/v1/meetings", json={"title": title, "date": day, "time": "09:00"}
            )

        response = authenticated_client.get("/api/v1/meetings")
        assert response.status_code == 200
        assert [m["title"] for m in response.json()] == ["Weekly Sync", "Kickoff"]

    def test_get_meeting_not_found(self, authenticated_client: TestClient):
        fake_id = "00000000-0000-0000-0000-000000000000"
        response = authenticated_client.get(f"/api/v1/meetings/{fake_id}")
        assert response.status_code == 404

    def test_get_meeting_invalid_id(self, authenticated_client: TestClient):
        response = authenticated_client.get("/api/v1/meetings/invalid-id")
        assert response.status_code == 400


class TestAttachAgendaItem:
    """Tests for building a meeting's agenda."""

    def test_schedule_two_items(
        self,
        authenticated_client: TestClient,
        test_meeting: Meeting,
        pending_item: AgendaItem,
        second_pending_item: AgendaItem,
    ):
        """Test positions, total time and status after two attachments."""
        first = authenticated_client.post(
            f"/api/v1/meetings/{test_meeting.id}/agenda-items",
            json={"agenda_item_id": str(pending_item.id), "time_slot_minutes": 15},
        )
        assert first.status_code == 201
        assert first.json()["order_index"] == 0
        assert first.json()["title"] == "Q3 roadmap"

        second = authenticated_client.post(
            f"/api/v1/meetings/{test_meeting.id}/agenda-items",
            json={"agenda_item_id": str(second_pending_item.id), "time_slot_minutes": 30},
        )
        assert second.status_code == 201
        assert second.json()["order_index"] == 1

        meeting = authenticated_client.get(f"/api/v1/meetings/{test_meeting.id}").json()
        assert meeting["total_minutes"] == 45
        assert [a["order_index"] for a in meeting["agenda_items"]] == [0, 1]
        assert [a["agenda_item_id"] for a in meeting["agenda_items"]] == [
            str(pending_item.id),
            str(second_pending_item.id),
        ]

        item = authenticated_client.get(f"/api/v1/agenda-items/{pending_item.id}").json()
        assert item["status"] == "scheduled"

        pending = authenticated_client.get("/api/v1/agenda-items/pending").json()
        assert pending == []

    def test_default_time_slot(
        self,
        authenticated_client: TestClient,
        test_meeting: Meeting,
        pending_item: AgendaItem,
    ):
        response = authenticated_client.post(
            f"/api/v1/meetings/{test_meeting.id}/agenda-items",
            json={"agenda_item_id": str(pending_item.id)},
        )
        assert response.status_code == 201
        assert response.json()["time_slot_minutes"] == 15

    def test_attach_without_item(
        self, authenticated_client: TestClient, test_meeting: Meeting, db: Session
    ):
        response = authenticated_client.post(
            f"/api/v1/meetings/{test_meeting.id}/agenda-items",
            json={"time_slot_minutes": 15},
        )
        assert response.status_code == 422
        assert db.query(MeetingAgendaItem).count() == 0

    def test_attach_zero_minutes(
        self,
        authenticated_client: TestClient,
        test_meeting: Meeting,
        pending_item: AgendaItem,
    ):
        response = authenticated_client.post(
            f"/api/v1/meetings/{test_meeting.id}/agenda-items",
            json={"agenda_item_id": str(pending_item.id), "time_slot_minutes": 0},
        )
        assert response.status_code == 422

    def test_attach_twice_conflicts(
        self,
        authenticated_client: TestClient,
        test_meeting: Meeting,
        pending_item: AgendaItem,
    ):
        url = f"/api/v1/meetings/{test_meeting.id}/agenda-items"
        payload = {"agenda_item_id": str(pending_item.id), "time_slot_minutes": 15}

        assert authenticated_client.post(url, json=payload).status_code == 201
        response = authenticated_client.post(url, json=payload)
        assert response.status_code == 409

    def test_attach_to_unknown_meeting(
        self, authenticated_client: TestClient, pending_item: AgendaItem
    ):
        fake_id = "00000000-0000-0000-0000-000000000000"
        response = authenticated_client.post(
            f"/api/v1/meetings/{fake_id}/agenda-items",
            json={"agenda_item_id": str(pending_item.id), "time_slot_minutes": 15},
        )
        assert response.status_code == 404
