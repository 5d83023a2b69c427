"""Health check endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from logistics.api import deps
from logistics.core.config import get_settings

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, str]:
    """Return application health metadata and database reachability."""
    settings = get_settings()
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "unavailable"
    return {
        "status": "ok",
        "service": settings.app_name,
        "database": database,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.app_env,
    }
