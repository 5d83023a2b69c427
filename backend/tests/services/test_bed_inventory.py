"""Bed synchronization and hotel inventory counters."""

from __future__ import annotations

from collections import Counter

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from logistics.db.session import get_sessionmaker
from logistics.models import Accommodation, BedType, HotelBed, HotelRoom, RoomType
from logistics.schemas.lodging import HotelRoomUpdate
from logistics.services import bed_inventory_service, room_service
from logistics.services.errors import StorageError

pytestmark = pytest.mark.asyncio


async def _bed_types(session, room_id) -> Counter:
    result = await session.execute(select(HotelBed.bed_type).where(HotelBed.room_id == room_id))
    return Counter(result.scalars().all())


async def test_create_room_provisions_beds_once(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=3, bed_type=BedType.DOUBLE, room_type=RoomType.TRIPLE)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        assert await bed_inventory_service.count_beds(session, room_id=room.id) == 3
        stored = await session.get(HotelRoom, room.id)
        created = await bed_inventory_service.sync_beds(session, room=stored)
        assert created == 0
        assert await bed_inventory_service.count_beds(session, room_id=room.id) == 3
        assert await _bed_types(session, room.id) == Counter({BedType.DOUBLE: 3})


async def test_capacity_increase_tops_up_and_decrease_keeps_beds(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=2)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await room_service.update_room(
            session, room_id=room.id, payload=HotelRoomUpdate(beds_capacity=5)
        )
        assert await bed_inventory_service.count_beds(session, room_id=room.id) == 5

    async with sessionmaker() as session:
        updated = await room_service.update_room(
            session, room_id=room.id, payload=HotelRoomUpdate(beds_capacity=2)
        )
        assert updated.beds_capacity == 2
        assert await bed_inventory_service.count_beds(session, room_id=room.id) == 5


async def test_default_bed_type_change_retypes_existing_beds(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=2, bed_type=BedType.SINGLE)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await room_service.update_room(
            session,
            room_id=room.id,
            payload=HotelRoomUpdate(default_bed_type=BedType.KING, beds_capacity=3),
        )

    async with sessionmaker() as session:
        assert await _bed_types(session, room.id) == Counter({BedType.KING: 3})
        stored = await session.get(Accommodation, hotel.id)
        assert stored.bed_inventory == {"KING": 3}
        assert stored.total_capacity == 3


async def test_capacity_only_update_keeps_bed_types(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=1, bed_type=BedType.SINGLE)
    (bed_id,) = await seeder.bed_ids(room.id)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        await bed_inventory_service.retype_bed(session, bed_id=bed_id, bed_type=BedType.QUEEN)
        await room_service.update_room(
            session, room_id=room.id, payload=HotelRoomUpdate(beds_capacity=2)
        )

    async with sessionmaker() as session:
        assert await _bed_types(session, room.id) == Counter(
            {BedType.QUEEN: 1, BedType.SINGLE: 1}
        )


async def test_room_without_default_bed_type_gets_no_beds(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=4, bed_type=None)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        assert await bed_inventory_service.count_beds(session, room_id=room.id) == 0
        stored = await session.get(Accommodation, hotel.id)
        assert stored.total_capacity == 0
        assert stored.room_inventory == {"SINGLE": 1}


async def test_inventory_counters_follow_rooms(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    await seeder.room(hotel.id, number="101", capacity=2, bed_type=BedType.SINGLE, room_type=RoomType.DOUBLE)
    second = await seeder.room(hotel.id, number="102", capacity=1, bed_type=BedType.KING)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        stored = await session.get(Accommodation, hotel.id)
        assert stored.room_inventory == {"DOUBLE": 1, "SINGLE": 1}
        assert stored.bed_inventory == {"KING": 1, "SINGLE": 2}
        assert stored.total_capacity == 3

    async with sessionmaker() as session:
        await room_service.delete_room(session, room_id=second.id)

    async with sessionmaker() as session:
        stored = await session.get(Accommodation, hotel.id)
        assert stored.bed_inventory == {"SINGLE": 2}
        assert stored.total_capacity == 2
        remaining = await session.execute(select(HotelBed).where(HotelBed.room_id == second.id))
        assert remaining.scalars().all() == []


async def test_match_bed_types_retypes_surplus_beds(seeder, db_url: str) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=3, bed_type=BedType.SINGLE)

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        retyped = await bed_inventory_service.match_bed_types(
            session,
            room_id=room.id,
            bed_types=[BedType.SINGLE, BedType.DOUBLE, BedType.DOUBLE],
        )
        assert retyped == 2

    async with sessionmaker() as session:
        assert await _bed_types(session, room.id) == Counter(
            {BedType.SINGLE: 1, BedType.DOUBLE: 2}
        )


async def test_sync_failure_keeps_room_saved(seeder, db_url: str, monkeypatch) -> None:
    hotel = await seeder.hotel()
    room = await seeder.room(hotel.id, capacity=1)

    async def failing_count(session, *, room_id):
        raise OperationalError("SELECT count(*) FROM hotel_beds", {}, Exception("disk gone"))

    monkeypatch.setattr(bed_inventory_service, "count_beds", failing_count)
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        with pytest.raises(StorageError, match="disk gone"):
            await room_service.update_room(
                session, room_id=room.id, payload=HotelRoomUpdate(beds_capacity=4)
            )

    async with sessionmaker() as session:
        stored = await session.get(HotelRoom, room.id)
        assert stored.beds_capacity == 4
        beds = await session.execute(
            select(func.count()).select_from(HotelBed).where(HotelBed.room_id == room.id)
        )
        assert beds.scalar_one() == 1
