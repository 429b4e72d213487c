"""Video publishing, listing, detail, update and deletion services."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import UploadFile
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database import utcnow
from models.video import Video
from models.watch_history import WatchHistoryEntry
from services.cascade import delete_video_cascade
from services.envelope import ApiResponse, api_response
from services.errors import NotFoundError, ValidationError
from services.media_storage import stage_upload, upload_media
from services.ownership import get_owned_or_raise
from services.persistence import commit_or_raise
from services.pipelines import get_video_detail, list_videos, serialize_video
from services.validation import optional_text, parse_publish_flag, require_id

logger = logging.getLogger(__name__)


def _has_file(file: Optional[UploadFile]) -> bool:
    return file is not None and bool((file.filename or "").strip())


def _discard(*paths: Optional[Path]) -> None:
    for path in paths:
        if path is not None:
            path.unlink(missing_ok=True)


async def list_videos_service(
    *,
    query: Optional[str],
    user_id: Optional[str],
    sort_by: Optional[str],
    sort_type: Optional[str],
    page: int,
    limit: int,
    db: AsyncSession,
) -> ApiResponse:
    owner_id = require_id(user_id, "user") if optional_text(user_id) else None
    videos = await list_videos(
        db,
        query=query,
        owner_id=owner_id,
        sort_by=sort_by,
        sort_type=sort_type,
        page=page,
        limit=limit,
    )
    return api_response(videos, "videos fetched successfully")


async def publish_video_service(
    *,
    owner_id: str,
    title: Optional[str],
    description: Optional[str],
    is_published: Any,
    video_file: Optional[UploadFile],
    thumbnail: Optional[UploadFile],
    db: AsyncSession,
) -> ApiResponse:
    publish = parse_publish_flag(is_published)
    clean_title = optional_text(title)
    clean_description = optional_text(description)
    if not clean_title or not clean_description:
        raise ValidationError(
            "provide both title and description",
            errors=[{"field": "title"}, {"field": "description"}],
        )

    video_path: Optional[Path] = None
    thumbnail_path: Optional[Path] = None
    try:
        video_path = await stage_upload(video_file, label="video_file")
        thumbnail_path = await stage_upload(thumbnail, label="thumbnail")
        video_upload = await upload_media(video_path, "video")
        thumbnail_upload = await upload_media(thumbnail_path, "image")
    finally:
        _discard(video_path, thumbnail_path)

    video = Video(
        owner_id=owner_id,
        title=clean_title,
        description=clean_description,
        video_file=video_upload.url,
        thumbnail=thumbnail_upload.url,
        duration=video_upload.duration,
        is_published=publish,
    )
    db.add(video)
    await commit_or_raise(db, "error while making document")
    logger.info("video_publish user=%s video=%s published=%s", owner_id, video.id, publish)
    return api_response(serialize_video(video), "video uploaded successfully")


async def _record_view(db: AsyncSession, video_id: str, viewer_id: str) -> None:
    """Bump the view counter and move the video to the end of the viewer's history."""
    await db.execute(
        update(Video)
        .where(Video.id == video_id)
        .values(views=Video.views + 1, updated_at=Video.updated_at)
        .execution_options(synchronize_session=False)
    )
    entry = (
        await db.execute(
            select(WatchHistoryEntry).where(
                WatchHistoryEntry.user_id == viewer_id,
                WatchHistoryEntry.video_id == video_id,
            )
        )
    ).scalar_one_or_none()
    if entry is None:
        db.add(WatchHistoryEntry(user_id=viewer_id, video_id=video_id))
    else:
        entry.created_at = utcnow()
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("watch_history_conflict user=%s video=%s", viewer_id, video_id)


async def get_video_service(*, video_id: str, principal_id: str, db: AsyncSession) -> ApiResponse:
    video_id = require_id(video_id, "video")
    exists = (await db.execute(select(Video.id).where(Video.id == video_id))).scalar_one_or_none()
    if exists is None:
        raise NotFoundError("video not found")

    await _record_view(db, video_id, principal_id)
    detail = await get_video_detail(db, video_id, principal_id)
    if detail is None:
        raise NotFoundError("video not found")
    return api_response(detail, "video fetched successfully")


async def update_video_service(
    *,
    video_id: str,
    principal_id: str,
    title: Optional[str],
    description: Optional[str],
    thumbnail: Optional[UploadFile],
    db: AsyncSession,
) -> ApiResponse:
    video_id = require_id(video_id, "video")
    new_title = optional_text(title)
    new_description = optional_text(description)
    if not new_title and not new_description and not _has_file(thumbnail):
        raise ValidationError("Please provide at least one field to update.")

    video = await get_owned_or_raise(db, Video, video_id, principal_id, label="video")

    if _has_file(thumbnail):
        staged = await stage_upload(thumbnail, label="thumbnail")
        video.thumbnail = (await upload_media(staged, "image")).url
    if new_title:
        video.title = new_title
    if new_description:
        video.description = new_description

    await commit_or_raise(db, "error while updating video details")
    logger.info("video_update user=%s video=%s", principal_id, video_id)
    return api_response(serialize_video(video), "video details updated successfully")


async def delete_video_service(*, video_id: str, principal_id: str, db: AsyncSession) -> ApiResponse:
    video_id = require_id(video_id, "video")
    video = await get_owned_or_raise(db, Video, video_id, principal_id, label="video")
    snapshot = serialize_video(video)
    await delete_video_cascade(db, video)
    return api_response(snapshot, "video deleted successfully")


async def toggle_publish_service(*, video_id: str, principal_id: str, db: AsyncSession) -> ApiResponse:
    video_id = require_id(video_id, "video")
    video = await get_owned_or_raise(db, Video, video_id, principal_id, label="video")
    video.is_published = not bool(video.is_published)
    await commit_or_raise(db, "error while toggling status")
    logger.info("video_publish_toggle user=%s video=%s published=%s", principal_id, video_id, video.is_published)
    return api_response(serialize_video(video), "status toggled successfully")
