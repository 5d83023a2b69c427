"""Accommodation API tests."""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_accommodation_crud(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    event_id = str(app_context["event_id"])

    create_resp = await client.post(
        "/api/v1/accommodations",
        json={"event_id": event_id, "name": "Grand Plaza", "address": "1 Main St"},
    )
    assert create_resp.status_code == 201
    hotel = create_resp.json()
    assert hotel["total_capacity"] == 0
    assert hotel["room_inventory"] == {}

    list_resp = await client.get("/api/v1/accommodations", params={"event_id": event_id})
    assert list_resp.status_code == 200
    assert [item["id"] for item in list_resp.json()] == [hotel["id"]]

    update_resp = await client.patch(
        f"/api/v1/accommodations/{hotel['id']}", json={"name": "Grand Plaza Hotel"}
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["name"] == "Grand Plaza Hotel"

    delete_resp = await client.delete(f"/api/v1/accommodations/{hotel['id']}")
    assert delete_resp.status_code == 204

    missing = await client.get(f"/api/v1/accommodations/{hotel['id']}")
    assert missing.status_code == 404


async def test_accommodation_with_rooms_cannot_be_deleted(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    seeder = app_context["seeder"]
    hotel = await seeder.hotel()  # type: ignore[attr-defined]
    await seeder.room(hotel.id)  # type: ignore[attr-defined]

    response = await client.delete(f"/api/v1/accommodations/{hotel.id}")
    assert response.status_code == 409

    missing = await client.delete(f"/api/v1/accommodations/{uuid.uuid4()}")
    assert missing.status_code == 404
