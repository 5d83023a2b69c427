"""Domain errors raised by the lodging services."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


class LodgingError(Exception):
    """Base class for hotel capacity errors surfaced to callers."""


class NotFoundError(LodgingError):
    """An identifier did not resolve to a row."""


class ConflictError(LodgingError):
    """The request would violate bed exclusivity or a uniqueness rule."""


class StorageError(LodgingError):
    """The relational store failed a read or write."""


@asynccontextmanager
async def storage_errors(session: AsyncSession, action: str) -> AsyncIterator[None]:
    """Roll back and re-raise store failures as :class:`StorageError`.

    Domain errors raised inside the block pass through untouched. There is
    no retry; the store's own message is kept in the raised error.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StorageError(f"{action}: {exc}") from exc


__all__ = [
    "ConflictError",
    "LodgingError",
    "NotFoundError",
    "StorageError",
    "storage_errors",
]
