"""Hotel assignment arbitration: bed claims, moves and releases."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.models.hotel_assignment import (
    LIVE_ASSIGNMENT_STATUSES,
    AssignmentStatus,
    HotelAssignment,
)
from logistics.models.lodging import Accommodation, HotelBed, HotelRoom
from logistics.models.participant import Participant
from logistics.schemas.hotel_assignment import HotelAssignmentUpdate
from logistics.services.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    storage_errors,
)

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[AssignmentStatus, set[AssignmentStatus]] = {
    AssignmentStatus.SCHEDULED: {AssignmentStatus.ACTIVE, AssignmentStatus.CANCELLED},
    AssignmentStatus.ACTIVE: {AssignmentStatus.CHECKOUT, AssignmentStatus.CANCELLED},
    AssignmentStatus.CHECKOUT: set(),
    AssignmentStatus.CANCELLED: set(),
}

_BED_OCCUPIED = "Bed is already occupied"


def _validate_status_transition(current: AssignmentStatus, target: AssignmentStatus) -> None:
    if target == current:
        return
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ValueError(
            f"Invalid status transition from {current.value} to {target.value}"
        )


async def list_assignments(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> Sequence[HotelAssignment]:
    stmt = select(HotelAssignment).order_by(HotelAssignment.created_at.desc())
    if hotel_id is not None:
        stmt = stmt.where(HotelAssignment.hotel_id == hotel_id)
    async with storage_errors(session, "Error fetching hotel assignments"):
        result = await session.execute(stmt.offset(skip).limit(min(limit, 500)))
        return result.scalars().all()


async def list_participant_assignments(
    session: AsyncSession,
    *,
    participant_id: uuid.UUID,
) -> Sequence[HotelAssignment]:
    """Return a participant's assignments, newest first, including history."""
    async with storage_errors(session, "Error fetching hotel assignments"):
        result = await session.execute(
            select(HotelAssignment)
            .where(HotelAssignment.participant_id == participant_id)
            .order_by(HotelAssignment.created_at.desc())
        )
        return result.scalars().all()


async def get_assignment(
    session: AsyncSession,
    *,
    assignment_id: uuid.UUID,
) -> HotelAssignment:
    async with storage_errors(session, "Error fetching hotel assignment"):
        assignment = await session.get(HotelAssignment, assignment_id)
    if assignment is None:
        raise NotFoundError(f"Hotel assignment with id {assignment_id} not found")
    return assignment


async def _resolve_placement(
    session: AsyncSession,
    *,
    hotel_id: uuid.UUID,
    room_id: uuid.UUID | None,
    bed_id: uuid.UUID | None,
) -> tuple[uuid.UUID | None, uuid.UUID | None]:
    """Check that hotel, room and bed exist and nest; infer the room from the bed."""
    if await session.get(Accommodation, hotel_id) is None:
        raise NotFoundError(f"Accommodation with id {hotel_id} not found")

    if room_id is not None:
        room = await session.get(HotelRoom, room_id)
        if room is None:
            raise NotFoundError(f"Hotel room with id {room_id} not found")
        if room.hotel_id != hotel_id:
            raise ValueError("Room does not belong to the selected hotel")

    if bed_id is not None:
        bed = await session.get(HotelBed, bed_id)
        if bed is None:
            raise NotFoundError(f"Hotel bed with id {bed_id} not found")
        if room_id is not None and bed.room_id != room_id:
            raise ValueError("Bed does not belong to the selected room")
        bed_room = await session.get(HotelRoom, bed.room_id)
        if bed_room is None or bed_room.hotel_id != hotel_id:
            raise ValueError("Bed does not belong to the selected hotel")
        room_id = bed.room_id

    return room_id, bed_id


async def _live_holder(
    session: AsyncSession,
    *,
    bed_id: uuid.UUID,
    assignment_id: uuid.UUID | None = None,
) -> uuid.UUID | None:
    stmt = select(HotelAssignment.id).where(
        HotelAssignment.bed_id == bed_id,
        HotelAssignment.status.in_(LIVE_ASSIGNMENT_STATUSES),
    )
    if assignment_id is not None:
        stmt = stmt.where(HotelAssignment.id != assignment_id)
    return (await session.execute(stmt.limit(1))).scalar_one_or_none()


async def claim_bed(
    session: AsyncSession,
    *,
    bed_id: uuid.UUID,
    assignment_id: uuid.UUID | None = None,
) -> HotelBed:
    """Lock a bed row and make sure no other live assignment holds it.

    The row lock serializes concurrent claims on engines that support
    ``SELECT ... FOR UPDATE``; the partial unique index on live bed
    references catches anything that still races through at commit.
    """
    result = await session.execute(
        select(HotelBed).where(HotelBed.id == bed_id).with_for_update()
    )
    bed = result.scalar_one_or_none()
    if bed is None:
        raise NotFoundError(f"Hotel bed with id {bed_id} not found")

    holder = await _live_holder(session, bed_id=bed_id, assignment_id=assignment_id)
    if holder is not None:
        logger.warning("Bed %s already held by assignment %s", bed_id, holder)
        raise ConflictError(_BED_OCCUPIED)
    return bed


async def _commit_claim(
    session: AsyncSession,
    bed_id: uuid.UUID | None,
    assignment_id: uuid.UUID | None = None,
) -> None:
    """Commit, reporting a lost race for the bed as a conflict.

    Other integrity failures, such as a participant removed mid-request,
    surface as ``StorageError``.
    """
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        holder = None
        if bed_id is not None:
            holder = await _live_holder(
                session, bed_id=bed_id, assignment_id=assignment_id
            )
        if holder is not None:
            logger.warning("Concurrent claim on bed %s rejected by the store", bed_id)
            raise ConflictError(_BED_OCCUPIED) from exc
        raise StorageError(f"Error saving hotel assignment: {exc}") from exc


async def create_assignment(
    session: AsyncSession,
    *,
    participant_id: uuid.UUID,
    hotel_id: uuid.UUID,
    room_id: uuid.UUID | None = None,
    bed_id: uuid.UUID | None = None,
    status: AssignmentStatus = AssignmentStatus.ACTIVE,
    checkin_at: datetime | None = None,
    checkout_at: datetime | None = None,
) -> HotelAssignment:
    """Book a participant into a hotel, optionally a specific room and bed."""
    async with storage_errors(session, "Error creating hotel assignment"):
        if await session.get(Participant, participant_id) is None:
            raise NotFoundError(f"Participant with id {participant_id} not found")
        room_id, bed_id = await _resolve_placement(
            session, hotel_id=hotel_id, room_id=room_id, bed_id=bed_id
        )
        if bed_id is not None and status in LIVE_ASSIGNMENT_STATUSES:
            await claim_bed(session, bed_id=bed_id)

        assignment = HotelAssignment(
            participant_id=participant_id,
            hotel_id=hotel_id,
            room_id=room_id,
            bed_id=bed_id,
            status=status,
            checkin_at=checkin_at,
            checkout_at=checkout_at,
        )
        session.add(assignment)
        await _commit_claim(session, bed_id)
        await session.refresh(assignment)

    if bed_id is not None:
        logger.info("Bed %s claimed by assignment %s", bed_id, assignment.id)
    return assignment


async def update_assignment(
    session: AsyncSession,
    *,
    assignment_id: uuid.UUID,
    payload: HotelAssignmentUpdate,
) -> HotelAssignment:
    """Apply a partial update, releasing the old bed and claiming the new one."""
    fields = payload.model_dump(exclude_unset=True)
    async with storage_errors(session, "Error updating hotel assignment"):
        assignment = await session.get(HotelAssignment, assignment_id)
        if assignment is None:
            raise NotFoundError(f"Hotel assignment with id {assignment_id} not found")

        previous_bed_id = assignment.bed_id
        was_live = assignment.is_live

        status = fields.get("status") or assignment.status
        _validate_status_transition(assignment.status, status)

        participant_id = fields.get("participant_id")
        if participant_id is not None and participant_id != assignment.participant_id:
            if await session.get(Participant, participant_id) is None:
                raise NotFoundError(f"Participant with id {participant_id} not found")
        else:
            participant_id = assignment.participant_id

        hotel_id = fields.get("hotel_id") or assignment.hotel_id
        room_id = fields["room_id"] if "room_id" in fields else assignment.room_id
        bed_id = fields["bed_id"] if "bed_id" in fields else assignment.bed_id
        room_id, bed_id = await _resolve_placement(
            session, hotel_id=hotel_id, room_id=room_id, bed_id=bed_id
        )

        if (
            bed_id is not None
            and status in LIVE_ASSIGNMENT_STATUSES
            and (bed_id != previous_bed_id or not was_live)
        ):
            await claim_bed(session, bed_id=bed_id, assignment_id=assignment.id)

        if status != assignment.status:
            now = datetime.now(UTC)
            if status == AssignmentStatus.ACTIVE and "checkin_at" not in fields:
                assignment.checkin_at = assignment.checkin_at or now
            if status == AssignmentStatus.CHECKOUT and "checkout_at" not in fields:
                assignment.checkout_at = assignment.checkout_at or now

        assignment.participant_id = participant_id
        assignment.hotel_id = hotel_id
        assignment.room_id = room_id
        assignment.bed_id = bed_id
        assignment.status = status
        if "checkin_at" in fields:
            assignment.checkin_at = fields["checkin_at"]
        if "checkout_at" in fields:
            assignment.checkout_at = fields["checkout_at"]

        await _commit_claim(session, bed_id, assignment.id)
        await session.refresh(assignment)

    if previous_bed_id is not None and was_live and (
        previous_bed_id != assignment.bed_id or not assignment.is_live
    ):
        logger.info("Bed %s released by assignment %s", previous_bed_id, assignment.id)
    if assignment.bed_id is not None and assignment.is_live and (
        assignment.bed_id != previous_bed_id or not was_live
    ):
        logger.info("Bed %s claimed by assignment %s", assignment.bed_id, assignment.id)
    return assignment


async def remove_assignment(
    session: AsyncSession,
    *,
    assignment_id: uuid.UUID,
) -> tuple[HotelAssignment, uuid.UUID | None]:
    """Delete an assignment and return it along with the bed it released."""
    async with storage_errors(session, "Error deleting hotel assignment"):
        assignment = await session.get(HotelAssignment, assignment_id)
        if assignment is None:
            raise NotFoundError(f"Hotel assignment with id {assignment_id} not found")
        released_bed_id = assignment.bed_id
        await session.delete(assignment)
        await session.commit()

    if released_bed_id is not None:
        logger.info("Bed %s released by deleting assignment %s", released_bed_id, assignment_id)
    return assignment, released_bed_id
