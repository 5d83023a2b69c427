"""Participant to bed assignment model."""
from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logistics.db.base import Base
from logistics.models.mixins import TimestampMixin, string_enum


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from logistics.models.lodging import Accommodation, HotelBed, HotelRoom
    from logistics.models.participant import Participant


class AssignmentStatus(str, enum.Enum):
    """Lifecycle states for hotel assignments."""

    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"
    CHECKOUT = "CHECKOUT"
    CANCELLED = "CANCELLED"


LIVE_ASSIGNMENT_STATUSES = (AssignmentStatus.SCHEDULED, AssignmentStatus.ACTIVE)
TERMINAL_ASSIGNMENT_STATUSES = (AssignmentStatus.CHECKOUT, AssignmentStatus.CANCELLED)

_LIVE_BED_PREDICATE = text("bed_id IS NOT NULL AND status IN ('SCHEDULED', 'ACTIVE')")


class HotelAssignment(TimestampMixin, Base):
    """Binds a participant to a hotel and optionally a room and bed."""

    __tablename__ = "hotel_assignments"
    __table_args__ = (
        Index("ix_hotel_assignments_hotel", "hotel_id"),
        Index("ix_hotel_assignments_participant", "participant_id"),
        # At most one live assignment may hold a bed.
        Index(
            "uq_hotel_assignments_live_bed",
            "bed_id",
            unique=True,
            sqlite_where=_LIVE_BED_PREDICATE,
            postgresql_where=_LIVE_BED_PREDICATE,
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    participant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("participants.id", ondelete="CASCADE"), nullable=False
    )
    hotel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="CASCADE"), nullable=False
    )
    room_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("hotel_rooms.id", ondelete="SET NULL"), nullable=True
    )
    bed_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("hotel_beds.id", ondelete="SET NULL"), nullable=True
    )
    checkin_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    checkout_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[AssignmentStatus] = mapped_column(
        string_enum(AssignmentStatus),
        default=AssignmentStatus.ACTIVE,
        nullable=False,
    )

    participant: Mapped["Participant"] = relationship(
        "Participant", back_populates="assignments"
    )
    hotel: Mapped["Accommodation"] = relationship("Accommodation")
    room: Mapped["HotelRoom | None"] = relationship("HotelRoom")
    bed: Mapped["HotelBed | None"] = relationship(
        "HotelBed", back_populates="assignments"
    )

    @property
    def is_live(self) -> bool:
        return self.status in LIVE_ASSIGNMENT_STATUSES
