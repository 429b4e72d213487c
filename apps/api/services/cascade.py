"""Deletion of parent records together with their dependents in one transaction."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.comment import Comment
from models.like import Like
from models.tweet import Tweet
from models.video import Video
from models.watch_history import WatchHistoryEntry
from services.errors import PersistenceError

logger = logging.getLogger(__name__)


def _likes_on(kind: str, *target_ids: Any):
    return delete(Like).where(Like.target_type == kind, Like.target_id.in_(target_ids))


async def _run_cascade(
    db: AsyncSession,
    primary: Any,
    statements: List[Tuple[str, Any]],
    *,
    label: str,
) -> Dict[str, int]:
    """Execute dependent deletes then the primary delete, committing once."""
    primary_id = primary.id
    removed: Dict[str, int] = {}
    try:
        for name, statement in statements:
            result = await db.execute(statement.execution_options(synchronize_session=False))
            removed[name] = int(result.rowcount or 0)
        await db.delete(primary)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("cascade_delete_failed %s=%s", label, primary_id)
        raise PersistenceError(f"error while deleting {label}") from exc

    logger.info("cascade_delete %s=%s removed=%s", label, primary_id, removed)
    return removed


async def delete_video_cascade(db: AsyncSession, video: Video) -> Dict[str, int]:
    """Remove a video, its comments, likes on both, and watch history references."""
    comment_ids = (
        await db.execute(select(Comment.id).where(Comment.video_id == video.id))
    ).scalars().all()
    statements = [
        ("comment_likes", _likes_on("comment", *comment_ids)),
        ("video_likes", _likes_on("video", video.id)),
        ("comments", delete(Comment).where(Comment.video_id == video.id)),
        ("watch_history", delete(WatchHistoryEntry).where(WatchHistoryEntry.video_id == video.id)),
    ]
    return await _run_cascade(db, video, statements, label="video")


async def delete_comment_cascade(db: AsyncSession, comment: Comment) -> Dict[str, int]:
    return await _run_cascade(
        db,
        comment,
        [("comment_likes", _likes_on("comment", comment.id))],
        label="comment",
    )


async def delete_tweet_cascade(db: AsyncSession, tweet: Tweet) -> Dict[str, int]:
    return await _run_cascade(
        db,
        tweet,
        [("tweet_likes", _likes_on("tweet", tweet.id))],
        label="tweet",
    )
