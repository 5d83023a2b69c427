"""Schemas for participant bed assignments."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from logistics.models.hotel_assignment import AssignmentStatus


class HotelAssignmentBase(BaseModel):
    """Shared assignment fields."""

    participant_id: uuid.UUID
    hotel_id: uuid.UUID
    room_id: uuid.UUID | None = None
    bed_id: uuid.UUID | None = None
    checkin_at: datetime | None = None
    checkout_at: datetime | None = None
    status: AssignmentStatus = AssignmentStatus.ACTIVE


class HotelAssignmentCreate(HotelAssignmentBase):
    """Payload for booking a participant into a hotel, room or bed."""


class HotelAssignmentUpdate(BaseModel):
    """Partial update; explicit nulls clear room or bed references."""

    participant_id: uuid.UUID | None = None
    hotel_id: uuid.UUID | None = None
    room_id: uuid.UUID | None = None
    bed_id: uuid.UUID | None = None
    checkin_at: datetime | None = None
    checkout_at: datetime | None = None
    status: AssignmentStatus | None = None


class HotelAssignmentRead(HotelAssignmentBase):
    """Serialized assignment response."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HotelAssignmentRelease(BaseModel):
    """Result of deleting an assignment."""

    assignment: HotelAssignmentRead
    released_bed_id: uuid.UUID | None = None
