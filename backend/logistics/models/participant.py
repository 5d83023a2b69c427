"""Participant directory mirrored from the athlete registry."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logistics.db.base import Base
from logistics.models.lodging import BedType, RoomType
from logistics.models.mixins import TimestampMixin, string_enum


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from logistics.models.hotel_assignment import HotelAssignment


class Participant(TimestampMixin, Base):
    """An athlete or delegate who can be booked into a bed."""

    __tablename__ = "participants"
    __table_args__ = (Index("ix_participants_event", "event_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    event_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    room_type: Mapped[RoomType | None] = mapped_column(string_enum(RoomType))
    bed_type: Mapped[BedType | None] = mapped_column(string_enum(BedType))
    hotel_accommodation_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("accommodations.id", ondelete="SET NULL"), nullable=True
    )

    assignments: Mapped[list["HotelAssignment"]] = relationship(
        "HotelAssignment", back_populates="participant"
    )
