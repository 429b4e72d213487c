"""Write helpers translating driver failures into PersistenceError."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.errors import PersistenceError

logger = logging.getLogger(__name__)


async def commit_or_raise(db: AsyncSession, message: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("commit_failed: %s", message)
        raise PersistenceError(message) from exc
