"""Bulk import of hotels, rooms and beds from spreadsheet rows."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.lodging import Accommodation, BedType, HotelRoom, RoomType
from logistics.schemas.lodging import (
    AccommodationCreate,
    HotelRoomCreate,
    HotelRoomUpdate,
)
from logistics.schemas.lodging_import import LodgingImportRow
from logistics.services import (
    accommodation_service,
    bed_inventory_service,
    room_service,
)
from logistics.services.errors import ConflictError, NotFoundError

LOGGER = logging.getLogger(__name__)

# Spreadsheet row 1 holds the headers.
_FIRST_DATA_ROW = 2

# Schema field names as they appear in the import columns.
_IMPORT_FIELDS = {"name": "hotel_name", "address": "hotel_address"}


@dataclass
class ImportStats:
    processed: int = 0
    hotels_created: int = 0
    rooms_created: int = 0
    rooms_expanded: int = 0
    beds_created: int = 0
    beds_retyped: int = 0
    errors: list[dict[str, Any]] = field(default_factory=list)

    def reject(self, row: int, field_name: str, message: str) -> None:
        self.errors.append({"row": row, "field": field_name, "message": message})

    def as_dict(self) -> dict[str, Any]:
        return {
            "processed": self.processed,
            "hotels_created": self.hotels_created,
            "rooms_created": self.rooms_created,
            "rooms_expanded": self.rooms_expanded,
            "beds_created": self.beds_created,
            "beds_retyped": self.beds_retyped,
            "errors": list(self.errors),
        }


@dataclass
class _BedLine:
    row: int
    event_id: uuid.UUID
    hotel_name: str
    hotel_address: str | None
    room_number: str
    room_type: RoomType
    bed_type: BedType


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _parse_row(number: int, row: LodgingImportRow, stats: ImportStats) -> _BedLine | None:
    errors_before = len(stats.errors)

    if row.event_id is None:
        stats.reject(number, "event_id", "Required")
    hotel_name = _clean(row.hotel_name)
    if not hotel_name:
        stats.reject(number, "hotel_name", "Required")
    room_number = _clean(row.room_number)
    if not room_number:
        stats.reject(number, "room_number", "Required")

    room_type = RoomType.SINGLE
    raw_room_type = _clean(row.room_type).upper()
    if raw_room_type:
        try:
            room_type = RoomType(raw_room_type)
        except ValueError:
            stats.reject(number, "room_type", f"Invalid room type {row.room_type!r}")

    bed_type: BedType | None = None
    raw_bed_type = _clean(row.bed_type).upper()
    if not raw_bed_type:
        stats.reject(number, "bed_type", "Required")
    else:
        try:
            bed_type = BedType(raw_bed_type)
        except ValueError:
            stats.reject(number, "bed_type", f"Invalid bed type {row.bed_type!r}")

    if len(stats.errors) > errors_before or row.event_id is None or bed_type is None:
        return None
    return _BedLine(
        row=number,
        event_id=row.event_id,
        hotel_name=hotel_name,
        hotel_address=_clean(row.hotel_address) or None,
        room_number=room_number,
        room_type=room_type,
        bed_type=bed_type,
    )


async def _find_or_create_hotel(
    session: AsyncSession,
    line: _BedLine,
    cache: dict[tuple[uuid.UUID, str], Accommodation],
    stats: ImportStats,
) -> Accommodation:
    key = (line.event_id, line.hotel_name.lower())
    hotel = cache.get(key)
    if hotel is None:
        hotel = await accommodation_service.find_accommodation_by_name(
            session, event_id=line.event_id, name=line.hotel_name
        )
    if hotel is None:
        hotel = await accommodation_service.create_accommodation(
            session,
            AccommodationCreate(
                event_id=line.event_id,
                name=line.hotel_name,
                address=line.hotel_address,
            ),
        )
        stats.hotels_created += 1
    cache[key] = hotel
    return hotel


async def _provision_room(
    session: AsyncSession,
    hotel: Accommodation,
    lines: list[_BedLine],
    stats: ImportStats,
) -> HotelRoom:
    first = lines[0]
    wanted = len(lines)
    room = await room_service.find_room_by_number(
        session, hotel_id=hotel.id, room_number=first.room_number
    )
    if room is None:
        room = await room_service.create_room(
            session,
            HotelRoomCreate(
                hotel_id=hotel.id,
                room_number=first.room_number,
                room_type=first.room_type,
                beds_capacity=wanted,
                default_bed_type=first.bed_type,
            ),
        )
        stats.rooms_created += 1
        stats.beds_created += await bed_inventory_service.count_beds(
            session, room_id=room.id
        )
        return room

    before = await bed_inventory_service.count_beds(session, room_id=room.id)
    previous_capacity = room.beds_capacity
    if room.beds_capacity < wanted or room.default_bed_type is None:
        changes: dict[str, Any] = {"beds_capacity": max(room.beds_capacity, wanted)}
        if room.default_bed_type is None:
            changes["default_bed_type"] = first.bed_type
        room = await room_service.update_room(
            session, room_id=room.id, payload=HotelRoomUpdate(**changes)
        )
        if wanted > previous_capacity:
            stats.rooms_expanded += 1
    after = await bed_inventory_service.count_beds(session, room_id=room.id)
    stats.beds_created += after - before
    return room


async def import_lodging(
    session: AsyncSession,
    rows: Sequence[LodgingImportRow],
    *,
    dry_run: bool = False,
) -> ImportStats:
    """Create or top up hotels, rooms and beds described by ``rows``.

    Each row stands for one bed. Rows are grouped per hotel room; a new room
    gets one bed per row and the first row's bed type as its default. Rooms
    that already exist are only ever grown. Rows that fail validation are
    reported and skipped. With ``dry_run`` only validation runs.
    """
    stats = ImportStats()
    groups: dict[tuple[uuid.UUID, str, str], list[_BedLine]] = {}

    for index, row in enumerate(rows):
        stats.processed += 1
        line = _parse_row(index + _FIRST_DATA_ROW, row, stats)
        if line is None:
            continue
        key = (line.event_id, line.hotel_name.lower(), line.room_number.lower())
        groups.setdefault(key, []).append(line)

    if dry_run:
        LOGGER.info(
            "Lodging import dry run: %s row(s), %s room group(s), %s rejected",
            stats.processed,
            len(groups),
            len(stats.errors),
        )
        return stats

    hotels: dict[tuple[uuid.UUID, str], Accommodation] = {}
    for lines in groups.values():
        first = lines[0]
        try:
            hotel = await _find_or_create_hotel(session, first, hotels, stats)
            room = await _provision_room(session, hotel, lines, stats)
            stats.beds_retyped += await bed_inventory_service.match_bed_types(
                session,
                room_id=room.id,
                bed_types=[line.bed_type for line in lines],
            )
        except ValidationError as exc:
            for error in exc.errors():
                location = str(error["loc"][0]) if error["loc"] else "row"
                stats.reject(
                    first.row, _IMPORT_FIELDS.get(location, location), error["msg"]
                )
        except ConflictError as exc:
            stats.reject(first.row, "room_number", str(exc))
        except (NotFoundError, ValueError) as exc:
            stats.reject(first.row, "row", str(exc))

    LOGGER.info(
        "Lodging import processed %s row(s): %s hotel(s), %s room(s), %s bed(s) created, %s rejected",
        stats.processed,
        stats.hotels_created,
        stats.rooms_created,
        stats.beds_created,
        len(stats.errors),
    )
    return stats
