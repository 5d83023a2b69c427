"""Schema exports."""

from logistics.schemas.hotel_assignment import (
    HotelAssignmentCreate,
    HotelAssignmentRead,
    HotelAssignmentRelease,
    HotelAssignmentUpdate,
)
from logistics.schemas.lodging import (
    AccommodationCreate,
    AccommodationRead,
    AccommodationUpdate,
    HotelBedRead,
    HotelBedUpdate,
    HotelRoomCreate,
    HotelRoomRead,
    HotelRoomUpdate,
)
from logistics.schemas.lodging_import import (
    LodgingImportError,
    LodgingImportRequest,
    LodgingImportRow,
    LodgingImportSummary,
)
from logistics.schemas.occupancy import BedTypeUsage, HotelOccupancy, RoomTypeUsage
from logistics.schemas.participant import ParticipantCreate, ParticipantRead

__all__ = [
    "AccommodationCreate",
    "AccommodationRead",
    "AccommodationUpdate",
    "BedTypeUsage",
    "HotelAssignmentCreate",
    "HotelAssignmentRead",
    "HotelAssignmentRelease",
    "HotelAssignmentUpdate",
    "HotelBedRead",
    "HotelBedUpdate",
    "HotelOccupancy",
    "HotelRoomCreate",
    "HotelRoomRead",
    "HotelRoomUpdate",
    "LodgingImportError",
    "LodgingImportRequest",
    "LodgingImportRow",
    "LodgingImportSummary",
    "ParticipantCreate",
    "ParticipantRead",
    "RoomTypeUsage",
]
