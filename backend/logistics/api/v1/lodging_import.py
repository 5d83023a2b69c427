"""Bulk lodging import endpoint."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.core.config import get_settings
from logistics.schemas.lodging_import import LodgingImportRequest, LodgingImportSummary
from logistics.services import lodging_import_service
from logistics.services.errors import StorageError

router = APIRouter(prefix="/lodging")


@router.post(
    "/import",
    response_model=LodgingImportSummary,
    summary="Import hotels, rooms and beds",
)
async def import_lodging(
    payload: LodgingImportRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> LodgingImportSummary:
    """Each row describes one bed. Invalid rows are reported, not fatal."""
    settings = get_settings()
    if not payload.rows:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No rows to import")
    if len(payload.rows) > settings.import_max_rows:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Import is limited to {settings.import_max_rows} rows",
        )
    try:
        stats = await lodging_import_service.import_lodging(session, payload.rows)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return LodgingImportSummary.model_validate(stats.as_dict())
