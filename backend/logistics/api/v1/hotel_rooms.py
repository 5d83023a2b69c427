"""Hotel room API endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.schemas.lodging import HotelRoomCreate, HotelRoomRead, HotelRoomUpdate
from logistics.services import room_service
from logistics.services.errors import ConflictError, NotFoundError, StorageError

router = APIRouter()


@router.get("", response_model=list[HotelRoomRead], summary="List hotel rooms")
async def list_rooms(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    hotel_id: uuid.UUID | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
) -> list[HotelRoomRead]:
    try:
        rooms = await room_service.list_rooms(
            session, hotel_id=hotel_id, skip=skip, limit=limit
        )
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [HotelRoomRead.model_validate(room) for room in rooms]


@router.post(
    "",
    response_model=HotelRoomRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create hotel room",
)
async def create_room(
    payload: HotelRoomCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelRoomRead:
    """Create a room and provision its beds from the default bed type."""
    try:
        room = await room_service.create_room(session, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelRoomRead.model_validate(room)


@router.get("/{room_id}", response_model=HotelRoomRead, summary="Get hotel room")
async def get_room(
    room_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelRoomRead:
    try:
        room = await room_service.get_room(session, room_id=room_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return HotelRoomRead.model_validate(room)


@router.patch("/{room_id}", response_model=HotelRoomRead, summary="Update hotel room")
async def update_room(
    room_id: uuid.UUID,
    payload: HotelRoomUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelRoomRead:
    try:
        room = await room_service.update_room(session, room_id=room_id, payload=payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelRoomRead.model_validate(room)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete hotel room")
async def delete_room(
    room_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> None:
    try:
        await room_service.delete_room(session, room_id=room_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
