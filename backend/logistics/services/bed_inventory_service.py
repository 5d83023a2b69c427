"""Bed inventory synchronization for hotel rooms."""
from __future__ import annotations

import logging
import uuid
from collections import Counter
from collections.abc import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.lodging import Accommodation, BedType, HotelBed, HotelRoom
from logistics.services.errors import NotFoundError, storage_errors

logger = logging.getLogger(__name__)


async def count_beds(session: AsyncSession, *, room_id: uuid.UUID) -> int:
    """Return the number of beds provisioned for a room."""
    result = await session.execute(
        select(func.count()).select_from(HotelBed).where(HotelBed.room_id == room_id)
    )
    return int(result.scalar_one())


async def sync_beds(
    session: AsyncSession,
    *,
    room: HotelRoom,
    retype: bool = False,
) -> int:
    """Top up a room's beds to its declared capacity.

    Rooms without a default bed type are managed by hand and are left alone.
    When ``retype`` is set every existing bed takes the room's default bed
    type. Beds are never removed, so lowering the capacity changes nothing
    until it is raised above the current bed count again.

    The room row must already be committed; a failure here is raised as
    ``StorageError`` and the room stays as saved. Returns the number of beds
    created.
    """
    bed_type = room.default_bed_type
    capacity = room.beds_capacity or 0
    if bed_type is None or capacity <= 0:
        return 0

    async with storage_errors(session, f"Error synchronizing beds for room {room.id}"):
        existing = await count_beds(session, room_id=room.id)

        if retype and existing > 0:
            await session.execute(
                update(HotelBed)
                .where(HotelBed.room_id == room.id)
                .values(bed_type=bed_type)
            )
            logger.info("Retyped %s bed(s) in room %s to %s", existing, room.id, bed_type.value)

        to_create = max(capacity - existing, 0)
        if to_create:
            session.add_all(
                [HotelBed(room_id=room.id, bed_type=bed_type) for _ in range(to_create)]
            )
            logger.info("Provisioning %s bed(s) for room %s", to_create, room.id)

        await session.flush()
        await refresh_hotel_inventory(session, hotel_id=room.hotel_id)
        await session.commit()
    return to_create


async def refresh_hotel_inventory(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID,
) -> Accommodation:
    """Recompute a hotel's room/bed counters and total capacity.

    Does not commit; callers own the transaction.
    """
    hotel = await session.get(Accommodation, hotel_id)
    if hotel is None:
        raise NotFoundError(f"Accommodation with id {hotel_id} not found")

    room_rows = await session.execute(
        select(HotelRoom.room_type, func.count())
        .where(HotelRoom.hotel_id == hotel_id)
        .group_by(HotelRoom.room_type)
    )
    bed_rows = await session.execute(
        select(HotelBed.bed_type, func.count())
        .join(HotelRoom, HotelBed.room_id == HotelRoom.id)
        .where(HotelRoom.hotel_id == hotel_id)
        .group_by(HotelBed.bed_type)
    )

    room_inventory = {room_type.value: int(count) for room_type, count in room_rows.all()}
    bed_inventory = {bed_type.value: int(count) for bed_type, count in bed_rows.all()}

    hotel.room_inventory = room_inventory
    hotel.bed_inventory = bed_inventory
    hotel.total_capacity = sum(bed_inventory.values())
    await session.flush()
    return hotel


async def retype_bed(
    session: AsyncSession,
    *,
    bed_id: uuid.UUID,
    bed_type: BedType,
) -> HotelBed:
    """Change the type of a single bed."""
    async with storage_errors(session, "Error updating hotel bed"):
        bed = await session.get(HotelBed, bed_id)
        if bed is None:
            raise NotFoundError(f"Hotel bed with id {bed_id} not found")
        room = await session.get(HotelRoom, bed.room_id)
        bed.bed_type = bed_type
        await session.flush()
        if room is not None:
            await refresh_hotel_inventory(session, hotel_id=room.hotel_id)
        await session.commit()
        await session.refresh(bed)
    return bed


async def match_bed_types(
    session: AsyncSession,
    *,
    room_id: uuid.UUID,
    bed_types: Sequence[BedType],
) -> int:
    """Retype surplus beds so each requested bed type is represented.

    Only beds whose type is over-represented relative to ``bed_types`` are
    touched, oldest first. Returns the number of beds retyped.
    """
    wanted = Counter(bed_types)
    async with storage_errors(session, f"Error matching bed types for room {room_id}"):
        result = await session.execute(
            select(HotelBed)
            .where(HotelBed.room_id == room_id)
            .order_by(HotelBed.created_at.asc(), HotelBed.id.asc())
        )
        beds = list(result.scalars().all())
        current = Counter(bed.bed_type for bed in beds)

        retyped = 0
        for target, needed in wanted.items():
            missing = needed - current[target]
            for bed in beds:
                if missing <= 0:
                    break
                if current[bed.bed_type] > wanted[bed.bed_type]:
                    current[bed.bed_type] -= 1
                    bed.bed_type = target
                    current[target] += 1
                    missing -= 1
                    retyped += 1

        if retyped:
            room = await session.get(HotelRoom, room_id)
            await session.flush()
            if room is not None:
                await refresh_hotel_inventory(session, hotel_id=room.hotel_id)
            await session.commit()
    return retyped
