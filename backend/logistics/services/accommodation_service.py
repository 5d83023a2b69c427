"""Accommodation (hotel) management services."""

from __future__ import annotations

import uuid

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.lodging import Accommodation, HotelRoom
from logistics.schemas.lodging import AccommodationCreate, AccommodationUpdate
from logistics.services.errors import ConflictError, storage_errors


async def list_accommodations(
    session: AsyncSession,
    *,
    event_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[Accommodation]:
    """Return accommodations, optionally scoped to an event."""
    stmt: Select[tuple[Accommodation]] = select(Accommodation)
    if event_id is not None:
        stmt = stmt.where(Accommodation.event_id == event_id)
    stmt = stmt.order_by(Accommodation.created_at.desc()).offset(skip).limit(min(limit, 500))
    async with storage_errors(session, "Error fetching accommodations"):
        result = await session.execute(stmt)
        return list(result.scalars().all())


async def get_accommodation(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
) -> Accommodation | None:
    async with storage_errors(session, "Error fetching accommodation"):
        return await session.get(Accommodation, accommodation_id)


async def find_accommodation_by_name(
    session: AsyncSession,
    *,
    event_id: uuid.UUID,
    name: str,
) -> Accommodation | None:
    """Look up a hotel within an event by name, ignoring case."""
    result = await session.execute(
        select(Accommodation)
        .where(
            Accommodation.event_id == event_id,
            func.lower(Accommodation.name) == name.strip().lower(),
        )
        .order_by(Accommodation.created_at.asc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create_accommodation(
    session: AsyncSession, payload: AccommodationCreate
) -> Accommodation:
    """Create a hotel with empty inventory counters."""
    accommodation = Accommodation(
        **payload.model_dump(),
        total_capacity=0,
        room_inventory={},
        bed_inventory={},
    )
    async with storage_errors(session, "Error creating accommodation"):
        session.add(accommodation)
        await session.commit()
        await session.refresh(accommodation)
    return accommodation


async def update_accommodation(
    session: AsyncSession,
    accommodation: Accommodation,
    payload: AccommodationUpdate,
) -> Accommodation:
    """Update descriptive fields on a hotel."""
    async with storage_errors(session, "Error updating accommodation"):
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field in {"event_id", "name"}:
                continue
            setattr(accommodation, field, value)
        await session.commit()
        await session.refresh(accommodation)
    return accommodation


async def delete_accommodation(session: AsyncSession, accommodation: Accommodation) -> None:
    """Delete a hotel that no longer has rooms."""
    async with storage_errors(session, "Error deleting accommodation"):
        rooms = await session.execute(
            select(func.count())
            .select_from(HotelRoom)
            .where(HotelRoom.hotel_id == accommodation.id)
        )
        if rooms.scalar_one():
            raise ConflictError("Accommodation still has rooms and cannot be deleted")
        await session.delete(accommodation)
        await session.commit()
