"""Service layer exports."""
from logistics.services import (
    accommodation_service,
    assignment_service,
    bed_inventory_service,
    lodging_import_service,
    occupancy_service,
    participant_service,
    room_service,
)

__all__ = [
    "accommodation_service",
    "assignment_service",
    "bed_inventory_service",
    "lodging_import_service",
    "occupancy_service",
    "participant_service",
    "room_service",
]
