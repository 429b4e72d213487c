"""Like router: toggles per target kind and the caller's liked videos."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.user import User
from routers.auth_scope import get_current_user
from services.envelope import ApiResponse
from services.likes import list_liked_videos_service, toggle_like_service

router = APIRouter()


@router.post("/toggle/v/{video_id}", response_model=ApiResponse)
async def toggle_video_like(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await toggle_like_service(kind="video", target_id=video_id, principal_id=current_user.id, db=db)


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse)
async def toggle_comment_like(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await toggle_like_service(kind="comment", target_id=comment_id, principal_id=current_user.id, db=db)


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse)
async def toggle_tweet_like(
    tweet_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await toggle_like_service(kind="tweet", target_id=tweet_id, principal_id=current_user.id, db=db)


@router.get("/videos", response_model=ApiResponse)
async def get_liked_videos(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_liked_videos_service(principal_id=current_user.id, db=db)
