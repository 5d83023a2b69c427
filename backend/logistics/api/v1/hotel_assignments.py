"""Hotel assignment API endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.schemas.hotel_assignment import (
    HotelAssignmentCreate,
    HotelAssignmentRead,
    HotelAssignmentRelease,
    HotelAssignmentUpdate,
)
from logistics.services import assignment_service
from logistics.services.errors import ConflictError, NotFoundError, StorageError

router = APIRouter()


@router.get("", response_model=list[HotelAssignmentRead], summary="List hotel assignments")
async def list_assignments(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    hotel_id: uuid.UUID | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
) -> list[HotelAssignmentRead]:
    try:
        assignments = await assignment_service.list_assignments(
            session, hotel_id=hotel_id, skip=skip, limit=limit
        )
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [HotelAssignmentRead.model_validate(item) for item in assignments]


@router.get(
    "/by-participant/{participant_id}",
    response_model=list[HotelAssignmentRead],
    summary="Assignment history for a participant",
)
async def list_participant_assignments(
    participant_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[HotelAssignmentRead]:
    try:
        assignments = await assignment_service.list_participant_assignments(
            session, participant_id=participant_id
        )
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [HotelAssignmentRead.model_validate(item) for item in assignments]


@router.post(
    "",
    response_model=HotelAssignmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Assign participant to a hotel bed",
)
async def create_assignment(
    payload: HotelAssignmentCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelAssignmentRead:
    """Create an assignment; a bed held by another live assignment is rejected with 409."""
    try:
        assignment = await assignment_service.create_assignment(
            session,
            participant_id=payload.participant_id,
            hotel_id=payload.hotel_id,
            room_id=payload.room_id,
            bed_id=payload.bed_id,
            status=payload.status,
            checkin_at=payload.checkin_at,
            checkout_at=payload.checkout_at,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelAssignmentRead.model_validate(assignment)


@router.get("/{assignment_id}", response_model=HotelAssignmentRead, summary="Get hotel assignment")
async def get_assignment(
    assignment_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelAssignmentRead:
    try:
        assignment = await assignment_service.get_assignment(session, assignment_id=assignment_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return HotelAssignmentRead.model_validate(assignment)


@router.patch(
    "/{assignment_id}",
    response_model=HotelAssignmentRead,
    summary="Update hotel assignment",
)
async def update_assignment(
    assignment_id: uuid.UUID,
    payload: HotelAssignmentUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelAssignmentRead:
    try:
        assignment = await assignment_service.update_assignment(
            session, assignment_id=assignment_id, payload=payload
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelAssignmentRead.model_validate(assignment)


@router.delete(
    "/{assignment_id}",
    response_model=HotelAssignmentRelease,
    summary="Delete hotel assignment",
)
async def delete_assignment(
    assignment_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelAssignmentRelease:
    try:
        assignment, released_bed_id = await assignment_service.remove_assignment(
            session, assignment_id=assignment_id
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return HotelAssignmentRelease(
        assignment=HotelAssignmentRead.model_validate(assignment),
        released_bed_id=released_bed_id,
    )
