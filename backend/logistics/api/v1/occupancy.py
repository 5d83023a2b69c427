"""Occupancy dashboard endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.schemas.occupancy import HotelOccupancy
from logistics.services import occupancy_service
from logistics.services.errors import StorageError

router = APIRouter(prefix="/occupancy")


@router.get("", response_model=list[HotelOccupancy], summary="Occupancy across hotels")
async def occupancy_overview(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    event_id: uuid.UUID | None = Query(default=None),
) -> list[HotelOccupancy]:
    """Per-hotel occupancy, busiest hotel first."""
    try:
        rows = await occupancy_service.occupancy_overview(session, event_id=event_id)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [HotelOccupancy.model_validate(row) for row in rows]
