"""Participant directory schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from logistics.models.lodging import BedType, RoomType


class ParticipantBase(BaseModel):
    event_id: uuid.UUID
    full_name: str = Field(min_length=1, max_length=255)
    room_type: RoomType | None = None
    bed_type: BedType | None = None
    hotel_accommodation_id: uuid.UUID | None = None


class ParticipantCreate(ParticipantBase):
    """Payload for registering a participant."""


class ParticipantRead(ParticipantBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
