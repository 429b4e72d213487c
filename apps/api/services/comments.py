"""Comment services."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.comment import Comment
from models.video import Video
from services.cascade import delete_comment_cascade
from services.envelope import ApiResponse, api_response
from services.errors import NotFoundError
from services.ownership import get_owned_or_raise
from services.persistence import commit_or_raise
from services.pipelines import list_video_comments
from services.validation import require_id, require_text

logger = logging.getLogger(__name__)


def serialize_comment(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "content": comment.content,
        "video_id": comment.video_id,
        "owner_id": comment.owner_id,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
        "updated_at": comment.updated_at.isoformat() if comment.updated_at else None,
    }


async def _require_video(db: AsyncSession, video_id: str) -> None:
    found = (await db.execute(select(Video.id).where(Video.id == video_id))).scalar_one_or_none()
    if found is None:
        raise NotFoundError("video not found")


async def list_comments_service(*, video_id: str, page: int, limit: int, db: AsyncSession) -> ApiResponse:
    video_id = require_id(video_id, "video")
    await _require_video(db, video_id)
    comments = await list_video_comments(db, video_id, page=page, limit=limit)
    return api_response(comments, "comments fetched successfully")


async def add_comment_service(
    *,
    video_id: str,
    principal_id: str,
    content: Optional[str],
    db: AsyncSession,
) -> ApiResponse:
    text = require_text(content, "content")
    video_id = require_id(video_id, "video")
    await _require_video(db, video_id)

    comment = Comment(content=text, video_id=video_id, owner_id=principal_id)
    db.add(comment)
    await commit_or_raise(db, "Something went wrong while adding comment in database")
    logger.info("comment_add user=%s video=%s comment=%s", principal_id, video_id, comment.id)
    return api_response(serialize_comment(comment), "Comment added successfully")


async def update_comment_service(
    *,
    comment_id: str,
    principal_id: str,
    content: Optional[str],
    db: AsyncSession,
) -> ApiResponse:
    text = require_text(content, "content")
    comment_id = require_id(comment_id, "comment")
    comment = await get_owned_or_raise(db, Comment, comment_id, principal_id, label="comment")

    comment.content = text
    await commit_or_raise(db, "Something went wrong while updating comment")
    return api_response(serialize_comment(comment), "comment updated successfully")


async def delete_comment_service(*, comment_id: str, principal_id: str, db: AsyncSession) -> ApiResponse:
    comment_id = require_id(comment_id, "comment")
    comment = await get_owned_or_raise(db, Comment, comment_id, principal_id, label="comment")
    await delete_comment_cascade(db, comment)
    return api_response({}, "comment deleted successfully")
