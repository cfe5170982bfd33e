"""Integration tests for problem-details error bodies and the health check."""

from uuid import uuid4

import pytest

PROBLEM_KEYS = {"type", "title", "status", "detail", "kind"}


class TestErrorResponses:
    @pytest.mark.asyncio
    async def test_not_found(self, async_client):
        response = await async_client.get(f"/api/opportunities/{uuid4()}")
        body = response.json()

        assert response.status_code == 404
        assert set(body) == PROBLEM_KEYS
        assert body["kind"] == "not_found"
        assert body["status"] == 404
        assert body["type"] == "https://api.callboard.app/errors/opportunity_not_found"

    @pytest.mark.asyncio
    async def test_unauthenticated(self, async_client):
        response = await async_client.get("/api/applause")
        assert response.status_code == 401
        assert response.json()["detail"] == "Must be logged in!"

    @pytest.mark.asyncio
    async def test_bad_token(self, async_client):
        response = await async_client.get(
            "/api/applause", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_role(self, async_client, signup):
        _, headers = await signup()
        response = await async_client.post("/api/challenges/post", headers=headers)
        assert response.status_code == 403
        assert response.json()["kind"] == "not_allowed"

    @pytest.mark.asyncio
    async def test_bad_values(self, async_client, signup):
        _, headers = await signup()
        response = await async_client.post(
            "/api/challenges", json={"prompt": ""}, headers=headers
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "bad_values"


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, async_client):
        response = await async_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "callboard"}
