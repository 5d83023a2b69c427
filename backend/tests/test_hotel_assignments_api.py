"""Hotel assignment API tests."""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _register(client: AsyncClient, event_id: str, name: str) -> str:
    response = await client.post(
        "/api/v1/participants",
        json={"event_id": event_id, "full_name": name, "bed_type": "SINGLE"},
    )
    assert response.status_code == 201
    return response.json()["id"]


async def test_assignment_flow(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    seeder = app_context["seeder"]
    event_id = str(app_context["event_id"])
    hotel = await seeder.hotel()  # type: ignore[attr-defined]
    room = await seeder.room(hotel.id, capacity=2)  # type: ignore[attr-defined]
    first_bed, second_bed = await seeder.bed_ids(room.id)  # type: ignore[attr-defined]
    ana = await _register(client, event_id, "Ana Souza")
    bruno = await _register(client, event_id, "Bruno Lima")

    create_resp = await client.post(
        "/api/v1/hotel-assignments",
        json={"participant_id": ana, "hotel_id": str(hotel.id), "bed_id": str(first_bed)},
    )
    assert create_resp.status_code == 201
    assignment = create_resp.json()
    assert assignment["room_id"] == str(room.id)
    assert assignment["status"] == "ACTIVE"

    conflict = await client.post(
        "/api/v1/hotel-assignments",
        json={"participant_id": bruno, "hotel_id": str(hotel.id), "bed_id": str(first_bed)},
    )
    assert conflict.status_code == 409

    move = await client.patch(
        f"/api/v1/hotel-assignments/{assignment['id']}", json={"bed_id": str(second_bed)}
    )
    assert move.status_code == 200
    beds = {
        bed["id"]: bed["status"]
        for bed in (await client.get("/api/v1/hotel-beds", params={"room_id": str(room.id)})).json()
    }
    assert beds == {str(first_bed): "AVAILABLE", str(second_bed): "OCCUPIED"}

    checkout = await client.patch(
        f"/api/v1/hotel-assignments/{assignment['id']}", json={"status": "CHECKOUT"}
    )
    assert checkout.status_code == 200
    assert checkout.json()["checkout_at"] is not None

    invalid = await client.patch(
        f"/api/v1/hotel-assignments/{assignment['id']}", json={"status": "ACTIVE"}
    )
    assert invalid.status_code == 400

    history = await client.get(f"/api/v1/hotel-assignments/by-participant/{ana}")
    assert history.status_code == 200
    assert [item["id"] for item in history.json()] == [assignment["id"]]

    delete_resp = await client.delete(f"/api/v1/hotel-assignments/{assignment['id']}")
    assert delete_resp.status_code == 200
    assert delete_resp.json()["released_bed_id"] == str(second_bed)

    gone = await client.get(f"/api/v1/hotel-assignments/{assignment['id']}")
    assert gone.status_code == 404


async def test_assignment_references_must_exist(app_context: dict[str, object]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    seeder = app_context["seeder"]
    hotel = await seeder.hotel()  # type: ignore[attr-defined]
    participant = await seeder.participant()  # type: ignore[attr-defined]

    unknown_bed = await client.post(
        "/api/v1/hotel-assignments",
        json={
            "participant_id": str(participant.id),
            "hotel_id": str(hotel.id),
            "bed_id": str(uuid.uuid4()),
        },
    )
    assert unknown_bed.status_code == 404

    unknown_hotel = await client.post(
        "/api/v1/hotel-assignments",
        json={"participant_id": str(participant.id), "hotel_id": str(uuid.uuid4())},
    )
    assert unknown_hotel.status_code == 404

    missing = await client.patch(
        f"/api/v1/hotel-assignments/{uuid.uuid4()}", json={"status": "CANCELLED"}
    )
    assert missing.status_code == 404
