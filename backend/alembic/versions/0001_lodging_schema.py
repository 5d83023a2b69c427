"""Create lodging tables: accommodations, rooms, beds, participants, assignments.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

_ROOM_TYPES = ("SINGLE", "DOUBLE", "TRIPLE", "SUITE")
_BED_TYPES = ("SINGLE", "DOUBLE", "QUEEN", "KING")
_ROOM_STATUSES = ("AVAILABLE", "MAINTENANCE", "OUT_OF_SERVICE")
_ASSIGNMENT_STATUSES = ("SCHEDULED", "ACTIVE", "CHECKOUT", "CANCELLED")

_LIVE_BED_PREDICATE = "bed_id IS NOT NULL AND status IN ('SCHEDULED', 'ACTIVE')"


def _string_enum(name: str, values: tuple[str, ...]) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, length=32)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "accommodations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("event_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("address", sa.String(length=255)),
        sa.Column("total_capacity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("room_inventory", sa.JSON(), nullable=False),
        sa.Column("bed_inventory", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_accommodations_event", "accommodations", ["event_id"])

    op.create_table(
        "hotel_rooms",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "hotel_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("room_number", sa.String(length=32), nullable=False),
        sa.Column("room_type", _string_enum("roomtype", _ROOM_TYPES), nullable=False),
        sa.Column("beds_capacity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("default_bed_type", _string_enum("bedtype", _BED_TYPES)),
        sa.Column(
            "status",
            _string_enum("roomstatus", _ROOM_STATUSES),
            nullable=False,
            server_default="AVAILABLE",
        ),
        sa.Column("notes", sa.String(length=1024)),
        *_timestamps(),
    )
    op.create_index(
        "uq_hotel_rooms_hotel_number",
        "hotel_rooms",
        ["hotel_id", sa.text("lower(room_number)")],
        unique=True,
    )

    op.create_table(
        "hotel_beds",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("hotel_rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("bed_type", _string_enum("bedtype", _BED_TYPES), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_hotel_beds_room", "hotel_beds", ["room_id"])

    op.create_table(
        "participants",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("event_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("room_type", _string_enum("roomtype", _ROOM_TYPES)),
        sa.Column("bed_type", _string_enum("bedtype", _BED_TYPES)),
        sa.Column(
            "hotel_accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="SET NULL"),
        ),
        *_timestamps(),
    )
    op.create_index("ix_participants_event", "participants", ["event_id"])

    op.create_table(
        "hotel_assignments",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "participant_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("participants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "hotel_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("hotel_rooms.id", ondelete="SET NULL"),
        ),
        sa.Column(
            "bed_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("hotel_beds.id", ondelete="SET NULL"),
        ),
        sa.Column("checkin_at", sa.DateTime(timezone=True)),
        sa.Column("checkout_at", sa.DateTime(timezone=True)),
        sa.Column(
            "status",
            _string_enum("assignmentstatus", _ASSIGNMENT_STATUSES),
            nullable=False,
            server_default="ACTIVE",
        ),
        *_timestamps(),
    )
    op.create_index("ix_hotel_assignments_hotel", "hotel_assignments", ["hotel_id"])
    op.create_index(
        "ix_hotel_assignments_participant", "hotel_assignments", ["participant_id"]
    )
    op.create_index(
        "uq_hotel_assignments_live_bed",
        "hotel_assignments",
        ["bed_id"],
        unique=True,
        sqlite_where=sa.text(_LIVE_BED_PREDICATE),
        postgresql_where=sa.text(_LIVE_BED_PREDICATE),
    )


def downgrade() -> None:
    op.drop_index("uq_hotel_assignments_live_bed", table_name="hotel_assignments")
    op.drop_index("ix_hotel_assignments_participant", table_name="hotel_assignments")
    op.drop_index("ix_hotel_assignments_hotel", table_name="hotel_assignments")
    op.drop_table("hotel_assignments")
    op.drop_index("ix_participants_event", table_name="participants")
    op.drop_table("participants")
    op.drop_index("ix_hotel_beds_room", table_name="hotel_beds")
    op.drop_table("hotel_beds")
    op.drop_index("uq_hotel_rooms_hotel_number", table_name="hotel_rooms")
    op.drop_table("hotel_rooms")
    op.drop_index("ix_accommodations_event", table_name="accommodations")
    op.drop_table("accommodations")
