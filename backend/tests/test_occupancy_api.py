"""Occupancy reporting API tests."""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_hotel_occupancy_report(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    seeder = app_context["seeder"]
    hotel = await seeder.hotel()  # type: ignore[attr-defined]
    room = await seeder.room(hotel.id, capacity=3, room_type="TRIPLE")  # type: ignore[attr-defined]
    bed_id, _, _ = await seeder.bed_ids(room.id)  # type: ignore[attr-defined]
    ana = await seeder.participant("Ana Souza")  # type: ignore[attr-defined]
    await seeder.participant("Bruno Lima")  # type: ignore[attr-defined]
    await seeder.assign(ana.id, hotel.id, bed_id=bed_id)  # type: ignore[attr-defined]

    response = await client.get(
        f"/api/v1/accommodations/{hotel.id}/occupancy",
        params={"event_id": str(app_context["event_id"])},
    )
    assert response.status_code == 200
    report = response.json()
    assert report["total_capacity"] == 3
    assert report["assigned"] == 1
    assert report["available"] == 2
    assert report["occupancy"] == 33.33
    assert report["room_usage"] == [{"type": "TRIPLE", "total": 1}]

    overview = await client.get("/api/v1/occupancy")
    assert overview.status_code == 200
    assert [row["hotel_id"] for row in overview.json()] == [str(hotel.id)]

    missing = await client.get(f"/api/v1/accommodations/{uuid.uuid4()}/occupancy")
    assert missing.status_code == 404
