"""Toggle relations: likes and subscriptions flip between present and absent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.like import LIKE_TARGET_KINDS
from services.errors import PersistenceError

logger = logging.getLogger(__name__)

MAX_TOGGLE_ATTEMPTS = 3


@dataclass(frozen=True)
class LikeTarget:
    """Exactly one likeable thing: a video, a comment or a tweet."""

    kind: str
    target_id: str

    def __post_init__(self) -> None:
        if self.kind not in LIKE_TARGET_KINDS:
            raise ValueError(f"Unknown like target kind: {self.kind!r}")
        if not str(self.target_id or "").strip():
            raise ValueError("Like target id is required")

    def relation_key(self, liked_by: str) -> Dict[str, Any]:
        return {"liked_by": liked_by, "target_type": self.kind, "target_id": self.target_id}


@dataclass
class ToggleResult:
    created: bool
    record: Optional[Any] = None


async def toggle_relation(
    db: AsyncSession,
    model: Type[Any],
    key: Dict[str, Any],
    *,
    max_attempts: int = MAX_TOGGLE_ATTEMPTS,
) -> ToggleResult:
    """Delete the relation identified by ``key`` if present, otherwise create it.

    The model carries a unique constraint over ``key``. A concurrent toggle that
    inserts first makes our insert fail; we roll back and run the toggle again
    against the new state.
    """
    conditions = [getattr(model, column) == value for column, value in key.items()]
    for attempt in range(1, max_attempts + 1):
        try:
            removed = await db.execute(
                delete(model).where(*conditions).execution_options(synchronize_session=False)
            )
            if removed.rowcount:
                await db.commit()
                return ToggleResult(created=False)

            record = model(**key)
            db.add(record)
            await db.commit()
            return ToggleResult(created=True, record=record)
        except IntegrityError:
            await db.rollback()
            logger.warning(
                "toggle_conflict relation=%s key=%s attempt=%s",
                model.__tablename__,
                key,
                attempt,
            )
        except SQLAlchemyError as exc:
            await db.rollback()
            raise PersistenceError(f"error while toggling {model.__tablename__}") from exc

    raise PersistenceError(f"error while toggling {model.__tablename__}")
