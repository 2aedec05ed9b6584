"""
Tests for the Homebase HTTP endpoints.

Acceptance Criteria:
- /api/people/drift returns the four sections plus a dashboard summary
- /api/people/outreach returns three drafts with the person's drift
- /api/habits/streak returns streak stats and whether today is done
- Invalid records return 400 errors
"""
import pytest
from unittest.mock import patch

from fastapi.testclient import TestClient

from api.main import app, run

pytestmark = pytest.mark.api

NOW = "2026-03-15T15:30:00-04:00"


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


def _person(person_id, last_interaction_at, **overrides):
    person = {
        "id": person_id,
        "full_name": f"{person_id.title()} Example",
        "preferred_cadence_days": 14,
        "created_at": "2025-01-01T09:00:00-05:00",
        "last_interaction_at": last_interaction_at,
    }
    person.update(overrides)
    return person


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "homebase"


class TestRun:

    def test_serves_on_configured_host_and_port(self):
        """The entry point should honor HOMEBASE_HOST and HOMEBASE_PORT."""
        with patch("api.main.settings.host", "127.0.0.1"), \
            patch("api.main.settings.port", 8123), \
            patch("api.main.uvicorn.run") as mock_run:
            run()

        mock_run.assert_called_once_with(app, host="127.0.0.1", port=8123)


class TestDriftEndpoint:

    def test_groups_people_into_sections(self, client):
        response = client.post("/api/people/drift", json={
            "now": NOW,
            "people": [
                _person("vip", "2026-02-10T12:00:00-05:00", priority="high"),
                _person("late", "2026-02-25T12:00:00-05:00"),
                _person("soon", "2026-03-03T12:00:00-05:00"),
                _person("fine", "2026-03-14T20:00:00-04:00", tags="friend,family"),
                _person("new", None, created_at="2026-03-10T09:00:00-04:00"),
            ],
        })
        assert response.status_code == 200
        data = response.json()

        assert [p["id"] for p in data["important_neglected"]] == ["vip"]
        assert [p["id"] for p in data["overdue"]] == ["late"]
        assert [p["id"] for p in data["due_soon"]] == ["soon"]
        assert [p["id"] for p in data["ok"]] == ["new", "fine"]
        assert data["total"] == 5

        fine = data["ok"][1]
        assert fine["days_since_last_interaction"] == 1
        assert fine["tags"] == ["friend", "family"]
        assert fine["drift_label"] == "Contacted 1 day ago"

        new = data["ok"][0]
        assert new["never_contacted"] is True
        assert new["days_since_last_interaction"] == 5
        assert new["drift_label"] == "Never contacted"

        assert data["summary"]["overdue_count"] == 2
        assert data["summary"]["next_person"]["id"] == "vip"

    def test_priority_filter(self, client):
        response = client.post("/api/people/drift", json={
            "now": NOW,
            "priority": "high",
            "people": [
                _person("vip", "2026-02-10T12:00:00-05:00", priority="high"),
                _person("late", "2026-02-25T12:00:00-05:00"),
            ],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["overdue"] == []
        assert data["summary"]["overdue_count"] == 2

    def test_unknown_priority_filter_rejected(self, client):
        response = client.post("/api/people/drift", json={"people": [], "priority": "urgent"})
        assert response.status_code == 400

    def test_non_positive_cadence_rejected(self, client):
        response = client.post("/api/people/drift", json={
            "people": [_person("zero", None, preferred_cadence_days=0)],
        })
        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    def test_unknown_interaction_type_rejected(self, client):
        response = client.post("/api/people/drift", json={
            "people": [_person("odd", None, last_interaction_type="carrier_pigeon")],
        })
        assert response.status_code == 400

    def test_now_defaults_to_current_time(self, client):
        response = client.post("/api/people/drift", json={
            "people": [_person("anyone", None)],
        })
        assert response.status_code == 200
        assert response.json()["total"] == 1


class TestOutreachEndpoint:

    def test_returns_three_drafts(self, client):
        response = client.post("/api/people/outreach", json={
            "now": NOW,
            "person": _person(
                "alex",
                "2026-01-01T12:00:00-05:00",
                tags=["colleague"],
                last_interaction_type="call",
            ),
        })
        assert response.status_code == 200
        data = response.json()

        assert data["casual"].startswith("Hey Alex! It's been a while. ")
        assert "see how things are going" in data["friendly"]
        assert data["direct"].endswith("quick call?")
        assert data["drift_status"] == "overdue"
        assert data["days_since_last_interaction"] == 73
        assert data["never_contacted"] is False


class TestStreakEndpoint:

    def test_streak_stats(self, client):
        response = client.post("/api/habits/streak", json={
            "now": NOW,
            "logs": [
                {"completed_at": "2026-03-15T07:00:00-04:00", "skipped": False},
                {"completed_at": "2026-03-14T07:00:00-04:00", "skipped": False},
                {"completed_at": "2026-03-13T07:00:00-04:00", "skipped": False},
                {"completed_at": "2026-03-12T07:00:00-04:00", "skipped": True, "skip_reason": "travel"},
                {"completed_at": "2026-03-11T07:00:00-04:00", "skipped": False},
            ],
        })
        assert response.status_code == 200
        data = response.json()

        assert data["current_streak"] == 3
        assert data["longest_streak"] == 3
        assert data["total_completions"] == 4
        assert data["completion_rate"] == 13
        assert data["streak_level"] == 2
        assert data["streak_message"] == "Building momentum!"
        assert data["completed_today"] is True

    def test_empty_log(self, client):
        response = client.post("/api/habits/streak", json={"now": NOW, "logs": []})
        assert response.status_code == 200
        data = response.json()
        assert data["current_streak"] == 0
        assert data["completion_rate"] == 0
        assert data["completed_today"] is False

    def test_missing_timestamp_rejected(self, client):
        response = client.post("/api/habits/streak", json={"logs": [{"skipped": False}]})
        assert response.status_code == 400

    def test_habit_presentation_fields_pass_through(self, client):
        response = client.post("/api/habits/streak", json={
            "now": NOW,
            "id": "habit-42",
            "color": "#3B82F6",
            "icon": "book",
            "logs": [{"completed_at": "2026-03-15T07:00:00-04:00"}],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "habit-42"
        assert data["color"] == "#3B82F6"
        assert data["icon"] == "book"
        assert data["current_streak"] == 1

    def test_presentation_fields_are_optional(self, client):
        response = client.post("/api/habits/streak", json={"now": NOW, "logs": []})
        data = response.json()
        assert data["id"] is None
        assert data["color"] is None
        assert data["icon"] is None
