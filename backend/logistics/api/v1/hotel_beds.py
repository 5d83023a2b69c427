"""Hotel bed API endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.schemas.lodging import HotelBedRead, HotelBedUpdate
from logistics.services import bed_inventory_service, occupancy_service
from logistics.services.errors import NotFoundError, StorageError

router = APIRouter()


@router.get("", response_model=list[HotelBedRead], summary="List hotel beds")
async def list_beds(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    hotel_id: uuid.UUID | None = Query(default=None),
    room_id: uuid.UUID | None = Query(default=None),
) -> list[HotelBedRead]:
    """Beds are OCCUPIED while a scheduled or active assignment holds them."""
    try:
        beds = await occupancy_service.list_beds(session, hotel_id=hotel_id, room_id=room_id)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [HotelBedRead.model_validate(bed) for bed in beds]


@router.get("/{bed_id}", response_model=HotelBedRead, summary="Get hotel bed")
async def get_bed(
    bed_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelBedRead:
    try:
        bed = await occupancy_service.get_bed(session, bed_id=bed_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelBedRead.model_validate(bed)


@router.patch("/{bed_id}", response_model=HotelBedRead, summary="Retype hotel bed")
async def retype_bed(
    bed_id: uuid.UUID,
    payload: HotelBedUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelBedRead:
    try:
        await bed_inventory_service.retype_bed(session, bed_id=bed_id, bed_type=payload.bed_type)
        bed = await occupancy_service.get_bed(session, bed_id=bed_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelBedRead.model_validate(bed)
