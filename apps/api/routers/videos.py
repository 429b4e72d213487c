"""
Video router: listing, publishing, detail, update, deletion and publish toggle.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.user import User
from routers.auth_scope import get_current_user
from services.envelope import ApiResponse
from services.videos import (
    delete_video_service,
    get_video_service,
    list_videos_service,
    publish_video_service,
    toggle_publish_service,
    update_video_service,
)

router = APIRouter()


@router.get("", response_model=ApiResponse)
async def get_all_videos(
    query: Optional[str] = None,
    user_id: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_type: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List videos matching a title/description search, sorted and paginated."""
    return await list_videos_service(
        query=query,
        user_id=user_id,
        sort_by=sort_by,
        sort_type=sort_type,
        page=page,
        limit=limit,
        db=db,
    )


@router.post("", response_model=ApiResponse)
async def publish_a_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    is_published: Optional[str] = Form(None),
    video_file: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Upload a video and its thumbnail, then create the video record."""
    return await publish_video_service(
        owner_id=current_user.id,
        title=title,
        description=description,
        is_published=is_published,
        video_file=video_file,
        thumbnail=thumbnail,
        db=db,
    )


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse)
async def toggle_publish_status(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await toggle_publish_service(video_id=video_id, principal_id=current_user.id, db=db)


@router.get("/{video_id}", response_model=ApiResponse)
async def get_video_by_id(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Video detail with like/subscription counters for the caller."""
    return await get_video_service(video_id=video_id, principal_id=current_user.id, db=db)


@router.patch("/{video_id}", response_model=ApiResponse)
async def update_video(
    video_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await update_video_service(
        video_id=video_id,
        principal_id=current_user.id,
        title=title,
        description=description,
        thumbnail=thumbnail,
        db=db,
    )


@router.delete("/{video_id}", response_model=ApiResponse)
async def delete_video(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a video with its comments, likes and watch history entries."""
    return await delete_video_service(video_id=video_id, principal_id=current_user.id, db=db)
