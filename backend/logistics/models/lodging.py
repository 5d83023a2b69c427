"""Hotel inventory models: accommodations, rooms and beds."""

from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from logistics.db.base import Base
from logistics.models.mixins import TimestampMixin, string_enum


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from logistics.models.hotel_assignment import HotelAssignment


class RoomType(str, enum.Enum):
    """Declared room categories."""

    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"
    SUITE = "SUITE"


class BedType(str, enum.Enum):
    """Bed sizes a room can be provisioned with."""

    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    QUEEN = "QUEEN"
    KING = "KING"


class RoomStatus(str, enum.Enum):
    """Operational state of a room."""

    AVAILABLE = "AVAILABLE"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


class BedStatus(str, enum.Enum):
    """Occupancy of a bed, derived from live assignments and never stored."""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"


class Accommodation(TimestampMixin, Base):
    """A hotel property scoped to one event."""

    __tablename__ = "accommodations"
    __table_args__ = (Index("ix_accommodations_event", "event_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    event_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    address: Mapped[str | None] = mapped_column(String(255))
    total_capacity: Mapped[int] = mapped_column(Integer(), default=0, nullable=False)
    room_inventory: Mapped[dict[str, int]] = mapped_column(
        JSON(), default=dict, nullable=False
    )
    bed_inventory: Mapped[dict[str, int]] = mapped_column(
        JSON(), default=dict, nullable=False
    )

    rooms: Mapped[list["HotelRoom"]] = relationship(
        "HotelRoom", back_populates="hotel"
    )


class HotelRoom(TimestampMixin, Base):
    """A room inside an accommodation."""

    __tablename__ = "hotel_rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    hotel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="RESTRICT"), nullable=False
    )
    room_number: Mapped[str] = mapped_column(String(32), nullable=False)
    room_type: Mapped[RoomType] = mapped_column(string_enum(RoomType), nullable=False)
    beds_capacity: Mapped[int] = mapped_column(Integer(), default=1, nullable=False)
    default_bed_type: Mapped[BedType | None] = mapped_column(string_enum(BedType))
    status: Mapped[RoomStatus] = mapped_column(
        string_enum(RoomStatus), default=RoomStatus.AVAILABLE, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(String(1024))

    hotel: Mapped["Accommodation"] = relationship(
        "Accommodation", back_populates="rooms"
    )
    beds: Mapped[list["HotelBed"]] = relationship(
        "HotelBed",
        back_populates="room",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# Room numbers collide regardless of case within one hotel.
Index(
    "uq_hotel_rooms_hotel_number",
    HotelRoom.__table__.c.hotel_id,
    func.lower(HotelRoom.__table__.c.room_number),
    unique=True,
)


class HotelBed(TimestampMixin, Base):
    """The unit of assignable capacity within a room."""

    __tablename__ = "hotel_beds"
    __table_args__ = (Index("ix_hotel_beds_room", "room_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("hotel_rooms.id", ondelete="CASCADE"), nullable=False
    )
    bed_type: Mapped[BedType] = mapped_column(string_enum(BedType), nullable=False)

    room: Mapped["HotelRoom"] = relationship("HotelRoom", back_populates="beds")
    assignments: Mapped[list["HotelAssignment"]] = relationship(
        "HotelAssignment", back_populates="bed"
    )
