"""Hotel room management services."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.hotel_assignment import LIVE_ASSIGNMENT_STATUSES, HotelAssignment
from logistics.models.lodging import Accommodation, HotelBed, HotelRoom
from logistics.schemas.lodging import HotelRoomCreate, HotelRoomUpdate
from logistics.services import bed_inventory_service
from logistics.services.errors import ConflictError, NotFoundError, storage_errors

logger = logging.getLogger(__name__)


async def list_rooms(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[HotelRoom]:
    """Return rooms, optionally scoped to a hotel."""
    stmt: Select[tuple[HotelRoom]] = select(HotelRoom)
    if hotel_id is not None:
        stmt = stmt.where(HotelRoom.hotel_id == hotel_id)
    stmt = stmt.order_by(HotelRoom.created_at.desc()).offset(skip).limit(min(limit, 500))
    async with storage_errors(session, "Error fetching hotel rooms"):
        result = await session.execute(stmt)
        return list(result.scalars().all())


async def get_room(session: AsyncSession, *, room_id: uuid.UUID) -> HotelRoom:
    async with storage_errors(session, "Error fetching hotel room"):
        room = await session.get(HotelRoom, room_id)
    if room is None:
        raise NotFoundError(f"Hotel room with id {room_id} not found")
    return room


async def find_room_by_number(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID,
    room_number: str,
) -> HotelRoom | None:
    """Look up a room by number, ignoring case."""
    result = await session.execute(
        select(HotelRoom).where(
            HotelRoom.hotel_id == hotel_id,
            func.lower(HotelRoom.room_number) == room_number.strip().lower(),
        )
    )
    return result.scalar_one_or_none()


async def _ensure_number_free(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID,
    room_number: str,
    exclude_room_id: uuid.UUID | None = None,
) -> None:
    existing = await find_room_by_number(
        session, hotel_id=hotel_id, room_number=room_number
    )
    if existing is not None and existing.id != exclude_room_id:
        raise ConflictError(f"Room {room_number} already exists in this hotel")


async def create_room(session: AsyncSession, payload: HotelRoomCreate) -> HotelRoom:
    """Create a room and provision its beds."""
    async with storage_errors(session, "Error creating hotel room"):
        if await session.get(Accommodation, payload.hotel_id) is None:
            raise NotFoundError(f"Accommodation with id {payload.hotel_id} not found")
        await _ensure_number_free(
            session, hotel_id=payload.hotel_id, room_number=payload.room_number
        )

        room = HotelRoom(**payload.model_dump())
        session.add(room)
        try:
            await session.flush()
        except IntegrityError as exc:
            await session.rollback()
            raise ConflictError(
                f"Room {payload.room_number} already exists in this hotel"
            ) from exc
        await bed_inventory_service.refresh_hotel_inventory(
            session, hotel_id=room.hotel_id
        )
        await session.commit()
        await session.refresh(room)

    await bed_inventory_service.sync_beds(session, room=room)
    return room


async def update_room(
    session: AsyncSession,
    *,
    room_id: uuid.UUID,
    payload: HotelRoomUpdate,
) -> HotelRoom:
    """Update a room; capacity or bed-type changes re-run bed synchronization."""
    fields = payload.model_dump(exclude_unset=True)
    async with storage_errors(session, "Error updating hotel room"):
        room = await session.get(HotelRoom, room_id)
        if room is None:
            raise NotFoundError(f"Hotel room with id {room_id} not found")

        number = fields.get("room_number")
        if number is not None and number.lower() != room.room_number.lower():
            await _ensure_number_free(
                session,
                hotel_id=room.hotel_id,
                room_number=number,
                exclude_room_id=room.id,
            )

        for field, value in fields.items():
            if value is None and field in {"room_number", "room_type", "beds_capacity", "status"}:
                continue
            setattr(room, field, value)

        try:
            await session.flush()
        except IntegrityError as exc:
            await session.rollback()
            raise ConflictError(f"Room {number} already exists in this hotel") from exc
        await bed_inventory_service.refresh_hotel_inventory(
            session, hotel_id=room.hotel_id
        )
        await session.commit()
        await session.refresh(room)

    if "beds_capacity" in fields or "default_bed_type" in fields:
        await bed_inventory_service.sync_beds(
            session,
            room=room,
            retype="default_bed_type" in fields,
        )
    return room


async def delete_room(session: AsyncSession, *, room_id: uuid.UUID) -> HotelRoom:
    """Delete a room and its beds unless one of them is occupied."""
    async with storage_errors(session, "Error deleting hotel room"):
        room = await session.get(HotelRoom, room_id)
        if room is None:
            raise NotFoundError(f"Hotel room with id {room_id} not found")

        occupied = await session.execute(
            select(func.count())
            .select_from(HotelAssignment)
            .join(HotelBed, HotelAssignment.bed_id == HotelBed.id)
            .where(
                HotelBed.room_id == room.id,
                HotelAssignment.status.in_(LIVE_ASSIGNMENT_STATUSES),
            )
        )
        if occupied.scalar_one():
            raise ConflictError("Room has occupied beds and cannot be deleted")

        hotel_id = room.hotel_id
        await session.delete(room)
        await session.flush()
        await bed_inventory_service.refresh_hotel_inventory(session, hotel_id=hotel_id)
        await session.commit()
    logger.info("Deleted room %s from hotel %s", room_id, hotel_id)
    return room
