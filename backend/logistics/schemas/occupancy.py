"""Occupancy reporting schemas."""
from __future__ import annotations

import uuid

from pydantic import BaseModel

from logistics.models.lodging import BedType, RoomType


class RoomTypeUsage(BaseModel):
    """Number of rooms declared with a room type."""

    type: RoomType
    total: int


class BedTypeUsage(BaseModel):
    """Beds of a type against participants declaring that type."""

    type: BedType
    total: int
    used: int
    available: int


class HotelOccupancy(BaseModel):
    """Occupancy snapshot for a single accommodation."""

    hotel_id: uuid.UUID
    hotel_name: str
    event_id: uuid.UUID
    total_rooms: int
    total_capacity: int
    assigned: int
    available: int
    occupancy: float
    room_usage: list[RoomTypeUsage]
    bed_usage: list[BedTypeUsage]
