"""Lodging import API tests."""
from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_import_endpoint_reports_summary(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    event_id = str(app_context["event_id"])

    response = await client.post(
        "/api/v1/lodging/import",
        json={
            "rows": [
                {"event_id": event_id, "hotel_name": "Grand Plaza", "room_number": "1", "bed_type": "KING"},
                {"event_id": event_id, "hotel_name": "Grand Plaza", "room_number": "2", "bed_type": "SOFA"},
            ]
        },
    )
    assert response.status_code == 200
    summary = response.json()
    assert summary["hotels_created"] == 1
    assert summary["rooms_created"] == 1
    assert summary["beds_created"] == 1
    assert summary["errors"] == [
        {"row": 3, "field": "bed_type", "message": "Invalid bed type 'SOFA'"}
    ]

    hotels = await client.get("/api/v1/accommodations", params={"event_id": event_id})
    assert hotels.json()[0]["bed_inventory"] == {"KING": 1}


async def test_import_endpoint_rejects_empty_payload(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post("/api/v1/lodging/import", json={"rows": []})
    assert response.status_code == 400
