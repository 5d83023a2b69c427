"""Versioned API router."""

from fastapi import APIRouter

from . import (
    accommodations,
    health,
    hotel_assignments,
    hotel_beds,
    hotel_rooms,
    lodging_import,
    occupancy,
    participants,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(
    accommodations.router, prefix="/accommodations", tags=["accommodations"]
)
router.include_router(hotel_rooms.router, prefix="/hotel-rooms", tags=["hotel-rooms"])
router.include_router(hotel_beds.router, prefix="/hotel-beds", tags=["hotel-beds"])
router.include_router(
    hotel_assignments.router, prefix="/hotel-assignments", tags=["hotel-assignments"]
)
router.include_router(occupancy.router, tags=["occupancy"])
router.include_router(participants.router, prefix="/participants", tags=["participants"])
router.include_router(lodging_import.router, tags=["lodging-import"])

__all__ = ["router"]
