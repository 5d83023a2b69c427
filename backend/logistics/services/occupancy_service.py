"""Occupancy read models: derived bed status and hotel utilization."""

from __future__ import annotations

import uuid
from collections import Counter
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.hotel_assignment import LIVE_ASSIGNMENT_STATUSES, HotelAssignment
from logistics.models.lodging import (
    Accommodation,
    BedStatus,
    BedType,
    HotelBed,
    HotelRoom,
    RoomType,
)
from logistics.models.participant import Participant
from logistics.services.errors import NotFoundError, storage_errors


async def _occupied_bed_ids(
    session: AsyncSession,
    bed_ids: Iterable[uuid.UUID] | None = None,
) -> set[uuid.UUID]:
    stmt = select(HotelAssignment.bed_id).where(
        HotelAssignment.bed_id.is_not(None),
        HotelAssignment.status.in_(LIVE_ASSIGNMENT_STATUSES),
    )
    if bed_ids is not None:
        stmt = stmt.where(HotelAssignment.bed_id.in_(list(bed_ids)))
    result = await session.execute(stmt)
    return {bed_id for bed_id in result.scalars().all() if bed_id is not None}


def _bed_view(bed: HotelBed, occupied: set[uuid.UUID]) -> dict[str, Any]:
    return {
        "id": bed.id,
        "room_id": bed.room_id,
        "bed_type": bed.bed_type,
        "status": BedStatus.OCCUPIED if bed.id in occupied else BedStatus.AVAILABLE,
        "created_at": bed.created_at,
        "updated_at": bed.updated_at,
    }


async def list_beds(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID | None = None,
    room_id: uuid.UUID | None = None,
) -> list[dict[str, Any]]:
    """Return beds with status derived from live assignments."""
    stmt = select(HotelBed).order_by(HotelBed.created_at.desc(), HotelBed.id)
    if room_id is not None:
        stmt = stmt.where(HotelBed.room_id == room_id)
    if hotel_id is not None:
        stmt = stmt.join(HotelRoom, HotelBed.room_id == HotelRoom.id).where(
            HotelRoom.hotel_id == hotel_id
        )
    async with storage_errors(session, "Error fetching hotel beds"):
        beds = list((await session.execute(stmt)).scalars().all())
        occupied = (
            await _occupied_bed_ids(session, [bed.id for bed in beds]) if beds else set()
        )
    return [_bed_view(bed, occupied) for bed in beds]


async def get_bed(session: AsyncSession, *, bed_id: uuid.UUID) -> dict[str, Any]:
    async with storage_errors(session, "Error fetching hotel bed"):
        bed = await session.get(HotelBed, bed_id)
        if bed is None:
            raise NotFoundError(f"Hotel bed with id {bed_id} not found")
        occupied = await _occupied_bed_ids(session, [bed_id])
    return _bed_view(bed, occupied)


def _occupancy_percent(assigned: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(min(assigned / total * 100, 100.0), 2)


async def _hotel_occupancy(
    session: AsyncSession,
    hotel: Accommodation,
    event_id: uuid.UUID | None,
) -> dict[str, Any]:
    room_types = (
        await session.execute(
            select(HotelRoom.room_type).where(HotelRoom.hotel_id == hotel.id)
        )
    ).scalars().all()
    bed_types = (
        await session.execute(
            select(HotelBed.bed_type)
            .join(HotelRoom, HotelBed.room_id == HotelRoom.id)
            .where(HotelRoom.hotel_id == hotel.id)
        )
    ).scalars().all()

    assignment_stmt = (
        select(Participant.bed_type)
        .select_from(HotelAssignment)
        .join(Participant, HotelAssignment.participant_id == Participant.id)
        .where(
            HotelAssignment.hotel_id == hotel.id,
            HotelAssignment.status.in_(LIVE_ASSIGNMENT_STATUSES),
        )
    )
    if event_id is not None:
        assignment_stmt = assignment_stmt.where(Participant.event_id == event_id)
    declared_bed_types = (await session.execute(assignment_stmt)).scalars().all()

    total = len(bed_types)
    assigned = len(declared_bed_types)

    room_counts = Counter(room_types)
    bed_counts = Counter(bed_types)
    # Participants are matched to bed types by what they declared, not by the
    # bed they hold.
    used_counts = Counter(bed_type for bed_type in declared_bed_types if bed_type is not None)

    return {
        "hotel_id": hotel.id,
        "hotel_name": hotel.name,
        "event_id": hotel.event_id,
        "total_rooms": len(room_types),
        "total_capacity": total,
        "assigned": assigned,
        "available": max(total - assigned, 0),
        "occupancy": _occupancy_percent(assigned, total),
        "room_usage": [
            {"type": room_type, "total": room_counts[room_type]}
            for room_type in RoomType
            if room_counts[room_type]
        ],
        "bed_usage": [
            {
                "type": bed_type,
                "total": bed_counts[bed_type],
                "used": used_counts[bed_type],
                "available": max(bed_counts[bed_type] - used_counts[bed_type], 0),
            }
            for bed_type in BedType
            if bed_counts[bed_type]
        ],
    }


async def occupancy_for_hotel(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID,
    event_id: uuid.UUID | None = None,
) -> dict[str, Any]:
    """Compute utilization for one hotel, optionally limited to an event's participants."""
    async with storage_errors(session, "Error computing hotel occupancy"):
        hotel = await session.get(Accommodation, hotel_id)
        if hotel is None:
            raise NotFoundError(f"Accommodation with id {hotel_id} not found")
        return await _hotel_occupancy(session, hotel, event_id)


async def occupancy_overview(
    session: AsyncSession,
    *,
    event_id: uuid.UUID | None = None,
) -> list[dict[str, Any]]:
    """Return occupancy for every hotel, busiest first."""
    stmt = select(Accommodation).order_by(Accommodation.name.asc())
    if event_id is not None:
        stmt = stmt.where(Accommodation.event_id == event_id)
    async with storage_errors(session, "Error computing hotel occupancy"):
        hotels = list((await session.execute(stmt)).scalars().all())
        rows = [await _hotel_occupancy(session, hotel, event_id) for hotel in hotels]
    rows.sort(key=lambda row: row["occupancy"], reverse=True)
    return rows
