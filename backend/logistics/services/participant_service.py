"""Participant directory services."""

from __future__ import annotations

import uuid

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.participant import Participant
from logistics.schemas.participant import ParticipantCreate
from logistics.services.errors import storage_errors


async def list_participants(
    session: AsyncSession,
    *,
    event_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[Participant]:
    stmt: Select[tuple[Participant]] = select(Participant)
    if event_id is not None:
        stmt = stmt.where(Participant.event_id == event_id)
    stmt = stmt.order_by(Participant.full_name.asc()).offset(skip).limit(min(limit, 500))
    async with storage_errors(session, "Error fetching participants"):
        result = await session.execute(stmt)
        return list(result.scalars().all())


async def get_participant(
    session: AsyncSession, *, participant_id: uuid.UUID
) -> Participant | None:
    async with storage_errors(session, "Error fetching participant"):
        return await session.get(Participant, participant_id)


async def create_participant(
    session: AsyncSession, payload: ParticipantCreate
) -> Participant:
    participant = Participant(**payload.model_dump())
    async with storage_errors(session, "Error creating participant"):
        session.add(participant)
        await session.commit()
        await session.refresh(participant)
    return participant
