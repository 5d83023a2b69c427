"""Test fixtures for the event logistics backend."""
from __future__ import annotations

import os
import uuid
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from logistics.core.config import get_settings
from logistics.db.base import Base
from logistics.db.session import dispose_engine, get_sessionmaker
from logistics.main import app
from logistics.models import (
    Accommodation,
    AssignmentStatus,
    BedType,
    HotelAssignment,
    HotelRoom,
    Participant,
    RoomType,
)
from logistics.schemas.lodging import AccommodationCreate, HotelRoomCreate
from logistics.schemas.participant import ParticipantCreate
from logistics.services import (
    accommodation_service,
    assignment_service,
    occupancy_service,
    participant_service,
    room_service,
)


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


class LodgingSeeder:
    """Creates hotels, rooms, participants and assignments through the services."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker
        self.event_id = uuid.uuid4()

    async def hotel(
        self, name: str = "Grand Plaza", *, event_id: uuid.UUID | None = None
    ) -> Accommodation:
        async with self.sessionmaker() as session:
            return await accommodation_service.create_accommodation(
                session,
                AccommodationCreate(event_id=event_id or self.event_id, name=name),
            )

    async def room(
        self,
        hotel_id: uuid.UUID,
        *,
        number: str = "101",
        capacity: int = 1,
        bed_type: BedType | None = BedType.SINGLE,
        room_type: RoomType = RoomType.SINGLE,
    ) -> HotelRoom:
        async with self.sessionmaker() as session:
            return await room_service.create_room(
                session,
                HotelRoomCreate(
                    hotel_id=hotel_id,
                    room_number=number,
                    room_type=room_type,
                    beds_capacity=capacity,
                    default_bed_type=bed_type,
                ),
            )

    async def bed_ids(self, room_id: uuid.UUID) -> list[uuid.UUID]:
        async with self.sessionmaker() as session:
            beds = await occupancy_service.list_beds(session, room_id=room_id)
        return sorted((bed["id"] for bed in beds), key=str)

    async def participant(
        self,
        full_name: str = "Ana Souza",
        *,
        bed_type: BedType | None = None,
        event_id: uuid.UUID | None = None,
    ) -> Participant:
        async with self.sessionmaker() as session:
            return await participant_service.create_participant(
                session,
                ParticipantCreate(
                    event_id=event_id or self.event_id,
                    full_name=full_name,
                    bed_type=bed_type,
                ),
            )

    async def assign(
        self,
        participant_id: uuid.UUID,
        hotel_id: uuid.UUID,
        *,
        bed_id: uuid.UUID | None = None,
        status: AssignmentStatus = AssignmentStatus.ACTIVE,
    ) -> HotelAssignment:
        async with self.sessionmaker() as session:
            return await assignment_service.create_assignment(
                session,
                participant_id=participant_id,
                hotel_id=hotel_id,
                bed_id=bed_id,
                status=status,
            )


@pytest_asyncio.fixture()
async def seeder(reset_database: None, db_url: str) -> LodgingSeeder:
    return LodgingSeeder(get_sessionmaker(db_url))


@pytest_asyncio.fixture()
async def app_context(seeder: LodgingSeeder) -> AsyncIterator[dict[str, object]]:
    """Yield an async client plus a seeded event id."""
    context: dict[str, object] = {"event_id": seeder.event_id, "seeder": seeder}

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
