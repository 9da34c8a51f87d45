"""
Tests for weekly schedule endpoints
"""

from unittest.mock import Mock

import pytest

from optima_api.models import StrategyResponse
from optima_api.routers.scheduler import get_strategy, list_strategies, set_strategy


def create(client, title, deadline, revenue):
    response = client.post(
        "/api/projects",
        json={"title": title, "deadline": deadline, "expected_revenue": revenue},
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def sample_projects(client):
    return {
        "p1": create(client, "P1", 2, 100),
        "p2": create(client, "P2", 1, 50),
        "p3": create(client, "P3", 2, 10),
    }


class TestScheduleGeneration:
    def test_generate_schedule(self, client, sample_projects):
        response = client.post("/api/schedule/generate")

        assert response.status_code == 200
        body = response.json()
        assert body["projects_scheduled"] == 2
        assert body["total_revenue"] == 150.0
        assert body["schedule"]["1"]["id"] == sample_projects["p2"]
        assert body["schedule"]["2"]["id"] == sample_projects["p1"]
        assert body["strategy"] == {"key": "greedy", "name": "Greedy (Revenue-Deadline)"}

    def test_current_schedule_matches_generate(self, client, sample_projects):
        generated = client.post("/api/schedule/generate").json()
        current = client.get("/api/schedule/current").json()

        assert current == generated

    def test_generate_with_no_projects(self, client):
        body = client.post("/api/schedule/generate").json()

        assert body["schedule"] == {}
        assert body["projects_scheduled"] == 0
        assert body["total_revenue"] == 0.0

    def test_generate_follows_selected_strategy(self, client, sample_projects):
        client.post("/api/schedule/strategy", params={"type": "fcfs"})

        body = client.post("/api/schedule/generate").json()

        assert body["strategy"]["key"] == "fcfs"
        assert body["schedule"]["1"]["id"] == sample_projects["p1"]
        assert body["schedule"]["2"]["id"] == sample_projects["p3"]
        assert body["total_revenue"] == 110.0


class TestStrategySelection:
    def test_list_strategies(self, client):
        response = client.get("/api/schedule/strategies")

        assert response.status_code == 200
        assert [s["key"] for s in response.json()] == ["fcfs", "edf", "priority", "greedy"]

    def test_get_default_strategy(self, client):
        assert client.get("/api/schedule/strategy").json()["key"] == "greedy"

    def test_set_strategy(self, client):
        response = client.post("/api/schedule/strategy", params={"type": "edf"})

        assert response.status_code == 200
        assert response.json() == {"key": "edf", "name": "EDF (Earliest Deadline First)"}
        assert client.get("/api/schedule/strategy").json()["key"] == "edf"

    def test_set_unknown_strategy(self, client):
        client.post("/api/schedule/strategy", params={"type": "priority"})

        response = client.post("/api/schedule/strategy", params={"type": "bogus"})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "UNKNOWN_STRATEGY"
        assert body["available"] == ["fcfs", "edf", "priority", "greedy"]
        assert client.get("/api/schedule/strategy").json()["key"] == "priority"

    def test_set_strategy_requires_type(self, client):
        response = client.post("/api/schedule/strategy")

        assert response.status_code == 422


class TestExecutionAndStats:
    def test_execute_completes_scheduled_projects(self, client, sample_projects):
        response = client.post("/api/schedule/execute")

        assert response.status_code == 200
        body = response.json()
        assert body["projects_scheduled"] == 2
        assert all(p["status"] == "completed" for p in body["schedule"].values())

        p3 = client.get(f"/api/projects/{sample_projects['p3']}").json()
        assert p3["status"] == "pending"
        p1 = client.get(f"/api/projects/{sample_projects['p1']}").json()
        assert p1["status"] == "completed"
        assert p1["completed_at"] is not None

    def test_stats_after_execute(self, client, sample_projects):
        client.post("/api/schedule/execute")

        stats = client.get("/api/schedule/stats").json()

        assert stats["weekly_revenue"] == 150.0
        assert stats["monthly_revenue"] == 150.0
        assert stats["projects_completed_this_week"] == 2
        assert stats["projects_completed_this_month"] == 2

    def test_stats_empty(self, client):
        stats = client.get("/api/schedule/stats").json()

        assert stats == {
            "weekly_revenue": 0.0,
            "monthly_revenue": 0.0,
            "projects_completed_this_month": 0,
            "projects_completed_this_week": 0,
        }

    def test_analytics_after_execute(self, client, sample_projects):
        client.post("/api/schedule/execute")

        analytics = client.get("/api/schedule/analytics").json()

        assert len(analytics) == 1
        assert analytics[0]["revenue"] == 150.0

    def test_execute_then_generate_schedules_remaining(self, client, sample_projects):
        client.post("/api/schedule/execute")

        body = client.post("/api/schedule/generate").json()

        assert body["projects_scheduled"] == 1
        assert body["schedule"]["2"]["id"] == sample_projects["p3"]


class TestRouterFunctions:
    """Call the endpoint functions directly with a mocked service"""

    @pytest.mark.asyncio
    async def test_list_strategies_direct(self):
        service = Mock()
        service.list_strategies.return_value = [StrategyResponse(key="edf", name="EDF")]

        result = await list_strategies(service)

        assert result == [StrategyResponse(key="edf", name="EDF")]

    @pytest.mark.asyncio
    async def test_get_strategy_direct(self):
        service = Mock()
        service.current_strategy.return_value = StrategyResponse(key="fcfs", name="FCFS")

        result = await get_strategy(service)

        assert result.key == "fcfs"

    @pytest.mark.asyncio
    async def test_set_strategy_direct(self):
        service = Mock()
        service.select_strategy.return_value = StrategyResponse(key="greedy", name="Greedy")

        result = await set_strategy(service, "greedy")

        service.select_strategy.assert_called_once_with("greedy")
        assert result.key == "greedy"
