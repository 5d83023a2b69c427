"""Accommodation (hotel) API endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.schemas.lodging import (
    AccommodationCreate,
    AccommodationRead,
    AccommodationUpdate,
)
from logistics.schemas.occupancy import HotelOccupancy
from logistics.services import accommodation_service, occupancy_service
from logistics.services.errors import ConflictError, NotFoundError, StorageError

router = APIRouter()


@router.get("", response_model=list[AccommodationRead], summary="List accommodations")
async def list_accommodations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    event_id: uuid.UUID | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
) -> list[AccommodationRead]:
    try:
        hotels = await accommodation_service.list_accommodations(
            session, event_id=event_id, skip=skip, limit=limit
        )
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [AccommodationRead.model_validate(hotel) for hotel in hotels]


@router.post(
    "",
    response_model=AccommodationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create accommodation",
)
async def create_accommodation(
    payload: AccommodationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    try:
        hotel = await accommodation_service.create_accommodation(session, payload)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return AccommodationRead.model_validate(hotel)


@router.get("/{accommodation_id}", response_model=AccommodationRead, summary="Get accommodation")
async def get_accommodation(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    hotel = await accommodation_service.get_accommodation(
        session, accommodation_id=accommodation_id
    )
    if hotel is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Accommodation not found")
    return AccommodationRead.model_validate(hotel)


@router.patch("/{accommodation_id}", response_model=AccommodationRead, summary="Update accommodation")
async def update_accommodation(
    accommodation_id: uuid.UUID,
    payload: AccommodationUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    hotel = await accommodation_service.get_accommodation(
        session, accommodation_id=accommodation_id
    )
    if hotel is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Accommodation not found")
    try:
        updated = await accommodation_service.update_accommodation(session, hotel, payload)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return AccommodationRead.model_validate(updated)


@router.delete(
    "/{accommodation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete accommodation",
)
async def delete_accommodation(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> None:
    hotel = await accommodation_service.get_accommodation(
        session, accommodation_id=accommodation_id
    )
    if hotel is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Accommodation not found")
    try:
        await accommodation_service.delete_accommodation(session, hotel)
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get(
    "/{accommodation_id}/occupancy",
    response_model=HotelOccupancy,
    summary="Hotel occupancy report",
)
async def get_accommodation_occupancy(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    event_id: uuid.UUID | None = Query(default=None),
) -> HotelOccupancy:
    """Beds, live assignments and utilization for one hotel."""
    try:
        report = await occupancy_service.occupancy_for_hotel(
            session, hotel_id=accommodation_id, event_id=event_id
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelOccupancy.model_validate(report)
