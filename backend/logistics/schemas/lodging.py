"""Schemas for accommodations, rooms and beds."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from logistics.models.lodging import BedStatus, BedType, RoomStatus, RoomType


class AccommodationBase(BaseModel):
    """Shared accommodation fields."""

    event_id: uuid.UUID
    name: str = Field(min_length=1, max_length=150)
    address: str | None = Field(default=None, max_length=255)


class AccommodationCreate(AccommodationBase):
    """Payload for creating an accommodation."""


class AccommodationUpdate(BaseModel):
    """Mutable accommodation fields; inventory counters are derived."""

    event_id: uuid.UUID | None = None
    name: str | None = Field(default=None, min_length=1, max_length=150)
    address: str | None = Field(default=None, max_length=255)


class AccommodationRead(AccommodationBase):
    """Serialized accommodation response."""

    id: uuid.UUID
    total_capacity: int
    room_inventory: dict[str, int]
    bed_inventory: dict[str, int]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HotelRoomBase(BaseModel):
    """Shared room fields."""

    hotel_id: uuid.UUID
    room_number: str = Field(min_length=1, max_length=32)
    room_type: RoomType
    beds_capacity: int = Field(default=1, ge=1)
    default_bed_type: BedType | None = None
    status: RoomStatus = RoomStatus.AVAILABLE
    notes: str | None = Field(default=None, max_length=1024)


class HotelRoomCreate(HotelRoomBase):
    """Payload for creating a room."""


class HotelRoomUpdate(BaseModel):
    """Mutable room fields."""

    room_number: str | None = Field(default=None, min_length=1, max_length=32)
    room_type: RoomType | None = None
    beds_capacity: int | None = Field(default=None, ge=1)
    default_bed_type: BedType | None = None
    status: RoomStatus | None = None
    notes: str | None = Field(default=None, max_length=1024)


class HotelRoomRead(HotelRoomBase):
    """Serialized room response."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HotelBedUpdate(BaseModel):
    """Operators may only retype an individual bed."""

    bed_type: BedType


class HotelBedRead(BaseModel):
    """Bed with its occupancy derived from live assignments."""

    id: uuid.UUID
    room_id: uuid.UUID
    bed_type: BedType
    status: BedStatus
    created_at: datetime
    updated_at: datetime
