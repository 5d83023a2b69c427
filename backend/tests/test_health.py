"""Health endpoint smoke test."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_healthcheck_returns_ok(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "Event Logistics API"
    assert payload["database"] == "ok"


async def test_responses_carry_request_id(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    request_id = uuid.uuid4().hex
    response = await client.get("/api/v1/health", headers={"X-Request-ID": request_id})
    assert response.headers["X-Request-ID"] == request_id
