"""Schemas for the bulk lodging import."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field


class LodgingImportRow(BaseModel):
    """One spreadsheet row describing a bed in a hotel room."""

    event_id: uuid.UUID | None = None
    hotel_name: str | None = None
    hotel_address: str | None = None
    room_number: str | None = None
    room_type: str | None = None
    bed_type: str | None = None


class LodgingImportRequest(BaseModel):
    rows: list[LodgingImportRow] = Field(default_factory=list)


class LodgingImportError(BaseModel):
    row: int
    field: str
    message: str


class LodgingImportSummary(BaseModel):
    """Counts of what an import created plus per-row rejections."""

    processed: int
    hotels_created: int
    rooms_created: int
    rooms_expanded: int
    beds_created: int
    beds_retyped: int
    errors: list[LodgingImportError]
