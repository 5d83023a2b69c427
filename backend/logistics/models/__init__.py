"""ORM models package export."""

from logistics.models.hotel_assignment import (
    LIVE_ASSIGNMENT_STATUSES,
    TERMINAL_ASSIGNMENT_STATUSES,
    AssignmentStatus,
    HotelAssignment,
)
from logistics.models.lodging import (
    Accommodation,
    BedStatus,
    BedType,
    HotelBed,
    HotelRoom,
    RoomStatus,
    RoomType,
)
from logistics.models.participant import Participant

__all__ = [
    "Accommodation",
    "AssignmentStatus",
    "BedStatus",
    "BedType",
    "HotelAssignment",
    "HotelBed",
    "HotelRoom",
    "LIVE_ASSIGNMENT_STATUSES",
    "Participant",
    "RoomStatus",
    "RoomType",
    "TERMINAL_ASSIGNMENT_STATUSES",
]
