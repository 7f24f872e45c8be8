"""
Task Scheduler Health Endpoint Tests
"""

import os
import pytest

from health_check import format_uptime


class TestUptimeFormatting:

    def test_seconds_only(self):
        assert format_uptime(5) == "5s"

    def test_days_hours_minutes(self):
        assert format_uptime(90061) == "1d 1h 1m 1s"


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Test health check endpoints"""

    async def test_root_endpoint(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "online"
        assert data["service"] == "Task Scheduler"
        assert data["storage"] == "healthy"

    async def test_root_reports_degraded_storage(self, test_client, store):
        os.remove(store.path)

        data = (await test_client.get("/")).json()

        assert data["status"] == "degraded"
        assert data["storage"] == "unhealthy"

    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_liveness(self, test_client):
        response = await test_client.get("/health/live")
        assert response.json() == {"status": "alive"}

    async def test_ready_with_tasks_file(self, test_client):
        await test_client.post("/api/tasks", json={"title": "one"})

        data = (await test_client.get("/health/ready")).json()

        assert data["status"] == "ready"
        assert data["checks"]["storage"]["tasks"] == 1

    async def test_not_ready_without_tasks_file(self, test_client, store):
        os.remove(store.path)

        data = (await test_client.get("/health/ready")).json()

        assert data["status"] == "not_ready"
        assert data["checks"]["storage"]["status"] == "unhealthy"
