"""
Notes App Backend - Health Route Tests
========================================

What we test:
    ✅ /health answers 200 with status OK and an ISO 8601 timestamp
    ✅ /health keeps answering when the database is closed
    ✅ /health/ready reflects database reachability
"""

from datetime import datetime

import pytest


class TestLiveness:

    @pytest.mark.asyncio
    async def test_health_ok(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["timestamp"].endswith("Z")
        parsed = datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
        assert parsed.tzinfo is not None

    @pytest.mark.asyncio
    async def test_health_independent_of_database(self, test_client, database):
        await database.close()

        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "OK"


class TestReadiness:

    @pytest.mark.asyncio
    async def test_ready_when_database_answers(self, test_client):
        response = await test_client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "database": "connected"}

    @pytest.mark.asyncio
    async def test_not_ready_when_database_closed(self, test_client, database):
        await database.close()

        response = await test_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json() == {"status": "UNAVAILABLE", "database": "disconnected"}
