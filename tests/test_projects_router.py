"""
Tests for project CRUD endpoints
"""

import pytest


def create(client, title="AI Predictor", deadline=3, revenue=12000.5):
    response = client.post(
        "/api/projects",
        json={"title": title, "deadline": deadline, "expected_revenue": revenue},
    )
    assert response.status_code == 201
    return response.json()


class TestProjectsRouter:
    def test_create_project(self, client):
        project = create(client)

        assert project["id"] > 0
        assert project["title"] == "AI Predictor"
        assert project["deadline"] == 3
        assert project["expected_revenue"] == 12000.5
        assert project["status"] == "pending"
        assert project["completed_at"] is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "Zero deadline", "deadline": 0, "expected_revenue": 100},
            {"title": "Free work", "deadline": 2, "expected_revenue": 0},
            {"title": "", "deadline": 2, "expected_revenue": 100},
            {"deadline": 2, "expected_revenue": 100},
        ],
    )
    def test_create_project_validation(self, client, payload):
        response = client.post("/api/projects", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["errors"]

    def test_list_projects_in_arrival_order(self, client):
        first = create(client, "First")
        second = create(client, "Second")

        response = client.get("/api/projects")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [first["id"], second["id"]]

    def test_list_projects_by_status(self, client):
        create(client, "Pending one")

        pending = client.get("/api/projects", params={"status": "pending"})
        completed = client.get("/api/projects", params={"status": "completed"})

        assert len(pending.json()) == 1
        assert completed.json() == []

    def test_get_project(self, client):
        created = create(client)

        response = client.get(f"/api/projects/{created['id']}")

        assert response.status_code == 200
        assert response.json()["title"] == "AI Predictor"

    def test_get_missing_project(self, client):
        response = client.get("/api/projects/9999")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "RESOURCE_NOT_FOUND"
        assert "9999" in body["detail"]

    def test_update_project(self, client):
        created = create(client)

        response = client.put(
            f"/api/projects/{created['id']}", json={"expected_revenue": 99.99}
        )

        assert response.status_code == 200
        assert response.json()["expected_revenue"] == 99.99
        assert response.json()["deadline"] == 3

    def test_update_project_without_fields(self, client):
        created = create(client)

        response = client.put(f"/api/projects/{created['id']}", json={})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_update_project_rejects_bad_deadline(self, client):
        created = create(client)

        response = client.put(f"/api/projects/{created['id']}", json={"deadline": -1})

        assert response.status_code == 422

    def test_delete_project(self, client):
        created = create(client)

        response = client.delete(f"/api/projects/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/projects/{created['id']}").status_code == 404

    def test_delete_missing_project(self, client):
        assert client.delete("/api/projects/9999").status_code == 404
