"""Like toggles and the liked-videos listing."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.comment import Comment
from models.like import Like
from models.tweet import Tweet
from models.video import Video
from services.envelope import ApiResponse, api_response
from services.errors import NotFoundError
from services.pipelines import list_liked_videos
from services.toggles import LikeTarget, toggle_relation
from services.validation import require_id

logger = logging.getLogger(__name__)

TARGET_MODELS = {"video": Video, "comment": Comment, "tweet": Tweet}
LIKED_MESSAGES = {
    "video": "like added",
    "comment": "liked comment successfully",
    "tweet": "liked tweet successfully",
}


def serialize_like(like: Like) -> dict:
    return {
        "id": like.id,
        "liked_by": like.liked_by,
        "target_type": like.target_type,
        like.target_type: like.target_id,
        "created_at": like.created_at.isoformat() if like.created_at else None,
    }


async def toggle_like_service(*, kind: str, target_id: str, principal_id: str, db: AsyncSession) -> ApiResponse:
    target = LikeTarget(kind=kind, target_id=require_id(target_id, kind))
    model = TARGET_MODELS[kind]
    found = (await db.execute(select(model.id).where(model.id == target.target_id))).scalar_one_or_none()
    if found is None:
        raise NotFoundError(f"{kind} not found")

    result = await toggle_relation(db, Like, target.relation_key(principal_id))
    logger.info(
        "like_toggle user=%s %s=%s liked=%s",
        principal_id,
        kind,
        target.target_id,
        result.created,
    )
    if result.created:
        return api_response(serialize_like(result.record), LIKED_MESSAGES[kind])
    return api_response("unliked", "removed your like")


async def list_liked_videos_service(*, principal_id: str, db: AsyncSession) -> ApiResponse:
    videos = await list_liked_videos(db, principal_id)
    return api_response(videos, "liked videos fetched successfully")
