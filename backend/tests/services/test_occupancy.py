"""Occupancy aggregation for hotel dashboards."""

from __future__ import annotations

import uuid

import pytest

from logistics.db.session import get_sessionmaker
from logistics.models import AssignmentStatus, BedStatus, BedType, RoomType
from logistics.services import occupancy_service
from logistics.services.errors import NotFoundError

pytestmark = pytest.mark.asyncio


async def test_single_room_scenario(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=3, room_type=RoomType.TRIPLE)
    first_bed, _, _ = await seeder.bed_ids(room.id)
    assigned = await seeder.participant("Ana Souza", bed_type=BedType.SINGLE)
    await seeder.participant("Bruno Lima", bed_type=BedType.SINGLE)
    await seeder.assign(assigned.id, hotel.id, bed_id=first_bed)

    async with get_sessionmaker(db_url)() as session:
        report = await occupancy_service.occupancy_for_hotel(session, hotel_id=hotel.id)

    assert report["total_rooms"] == 1
    assert report["total_capacity"] == 3
    assert report["assigned"] == 1
    assert report["available"] == 2
    assert report["occupancy"] == 33.33
    assert report["room_usage"] == [{"type": RoomType.TRIPLE, "total": 1}]
    assert report["bed_usage"] == [
        {"type": BedType.SINGLE, "total": 3, "used": 1, "available": 2}
    ]


async def test_hotel_without_beds_reports_zero(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    participant = await seeder.participant()
    await seeder.assign(participant.id, hotel.id)

    async with get_sessionmaker(db_url)() as session:
        report = await occupancy_service.occupancy_for_hotel(session, hotel_id=hotel.id)

    assert report["total_capacity"] == 0
    assert report["assigned"] == 1
    assert report["available"] == 0
    assert report["occupancy"] == 0


async def test_occupancy_is_clamped_when_overbooked(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    await seeder.room(hotel.id, capacity=1)
    for name in ("Ana Souza", "Bruno Lima", "Carla Dias"):
        participant = await seeder.participant(name)
        await seeder.assign(participant.id, hotel.id)

    async with get_sessionmaker(db_url)() as session:
        report = await occupancy_service.occupancy_for_hotel(session, hotel_id=hotel.id)

    assert report["assigned"] == 3
    assert report["available"] == 0
    assert report["occupancy"] == 100.0


async def test_only_live_assignments_count(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=2)
    first_bed, second_bed = await seeder.bed_ids(room.id)
    first = await seeder.participant("Ana Souza")
    second = await seeder.participant("Bruno Lima")
    await seeder.assign(first.id, hotel.id, bed_id=first_bed, status=AssignmentStatus.SCHEDULED)
    await seeder.assign(second.id, hotel.id, bed_id=second_bed, status=AssignmentStatus.CHECKOUT)

    async with get_sessionmaker(db_url)() as session:
        report = await occupancy_service.occupancy_for_hotel(session, hotel_id=hotel.id)

    assert report["assigned"] == 1
    assert report["occupancy"] == 50.0


async def test_event_filter_limits_assigned_participants(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=2)
    first_bed, second_bed = await seeder.bed_ids(room.id)
    other_event = uuid.uuid4()
    local = await seeder.participant("Ana Souza")
    visitor = await seeder.participant("Bruno Lima", event_id=other_event)
    await seeder.assign(local.id, hotel.id, bed_id=first_bed)
    await seeder.assign(visitor.id, hotel.id, bed_id=second_bed)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        everyone = await occupancy_service.occupancy_for_hotel(session, hotel_id=hotel.id)
        scoped = await occupancy_service.occupancy_for_hotel(
            session, hotel_id=hotel.id, event_id=seeder.event_id
        )

    assert everyone["assigned"] == 2
    assert scoped["assigned"] == 1
    assert scoped["available"] == 1
    assert scoped["occupancy"] == 50.0


async def test_bed_usage_follows_declared_bed_type(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=2, bed_type=BedType.SINGLE)
    first_bed, _ = await seeder.bed_ids(room.id)
    participant = await seeder.participant(bed_type=BedType.KING)
    await seeder.assign(participant.id, hotel.id, bed_id=first_bed)

    async with get_sessionmaker(db_url)() as session:
        report = await occupancy_service.occupancy_for_hotel(session, hotel_id=hotel.id)

    # The participant holds a SINGLE bed but asked for a KING, and no KING
    # beds exist, so neither bed type shows usage.
    assert report["bed_usage"] == [
        {"type": BedType.SINGLE, "total": 2, "used": 0, "available": 2}
    ]
    assert report["assigned"] == 1


async def test_overview_sorted_by_occupancy(seeder, db_url: str) -> None:
    quiet = await seeder.hotel("Harbour Inn")
    busy = await seeder.hotel("Grand Plaza")
    await seeder.room(quiet.id, capacity=4)
    busy_room = await seeder.room(busy.id, capacity=1)
    (bed_id,) = await seeder.bed_ids(busy_room.id)
    participant = await seeder.participant()
    await seeder.assign(participant.id, busy.id, bed_id=bed_id)
    await seeder.hotel("Elsewhere", event_id=uuid.uuid4())

    async with get_sessionmaker(db_url)() as session:
        rows = await occupancy_service.occupancy_overview(session, event_id=seeder.event_id)

    assert [row["hotel_name"] for row in rows] == ["Grand Plaza", "Harbour Inn"]
    assert [row["occupancy"] for row in rows] == [100.0, 0]


async def test_unknown_hotel_raises_not_found(seeder, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(NotFoundError):
            await occupancy_service.occupancy_for_hotel(session, hotel_id=uuid.uuid4())


async def test_list_beds_only_checks_listed_beds(seeder, db_url: str, monkeypatch) -> None:
    hotel = await seeder.hotel()
    quiet_room = await seeder.room(hotel.id, number="101", capacity=2)
    busy_room = await seeder.room(hotel.id, number="102")
    quiet_beds = await seeder.bed_ids(quiet_room.id)
    (busy_bed,) = await seeder.bed_ids(busy_room.id)
    participant = await seeder.participant()
    await seeder.assign(participant.id, hotel.id, bed_id=busy_bed)

    checked: list[set[uuid.UUID] | None] = []
    original = occupancy_service._occupied_bed_ids

    async def recording_occupied(session, bed_ids=None):
        checked.append(None if bed_ids is None else set(bed_ids))
        return await original(session, bed_ids)

    monkeypatch.setattr(occupancy_service, "_occupied_bed_ids", recording_occupied)
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        room_beds = await occupancy_service.list_beds(session, room_id=quiet_room.id)
        hotel_beds = await occupancy_service.list_beds(session, hotel_id=hotel.id)

    assert checked == [set(quiet_beds), set(quiet_beds) | {busy_bed}]
    assert {bed["status"] for bed in room_beds} == {BedStatus.AVAILABLE}
    assert {bed["id"]: bed["status"] for bed in hotel_beds}[busy_bed] == BedStatus.OCCUPIED
