"""Participant directory endpoints."""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.schemas.participant import ParticipantCreate, ParticipantRead
from logistics.services import participant_service
from logistics.services.errors import StorageError

router = APIRouter()


@router.get("", response_model=list[ParticipantRead], summary="List participants")
async def list_participants(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    event_id: uuid.UUID | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
) -> list[ParticipantRead]:
    participants = await participant_service.list_participants(
        session, event_id=event_id, skip=skip, limit=limit
    )
    return [ParticipantRead.model_validate(item) for item in participants]


@router.post(
    "",
    response_model=ParticipantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register participant",
)
async def create_participant(
    payload: ParticipantCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ParticipantRead:
    try:
        participant = await participant_service.create_participant(session, payload)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return ParticipantRead.model_validate(participant)


@router.get("/{participant_id}", response_model=ParticipantRead, summary="Get participant")
async def get_participant(
    participant_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ParticipantRead:
    participant = await participant_service.get_participant(
        session, participant_id=participant_id
    )
    if participant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")
    return ParticipantRead.model_validate(participant)
