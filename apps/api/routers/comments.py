"""Comment router."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.user import User
from routers.auth_scope import get_current_user
from services.comments import (
    add_comment_service,
    delete_comment_service,
    list_comments_service,
    update_comment_service,
)
from services.envelope import ApiResponse

router = APIRouter()


class CommentRequest(BaseModel):
    content: Optional[str] = None


@router.get("/{video_id}", response_model=ApiResponse)
async def get_video_comments(
    video_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_comments_service(video_id=video_id, page=page, limit=limit, db=db)


@router.post("/{video_id}", response_model=ApiResponse)
async def add_comment(
    video_id: str,
    request: CommentRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await add_comment_service(
        video_id=video_id,
        principal_id=current_user.id,
        content=request.content,
        db=db,
    )


@router.patch("/c/{comment_id}", response_model=ApiResponse)
async def update_comment(
    comment_id: str,
    request: CommentRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await update_comment_service(
        comment_id=comment_id,
        principal_id=current_user.id,
        content=request.content,
        db=db,
    )


@router.delete("/c/{comment_id}", response_model=ApiResponse)
async def delete_comment(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await delete_comment_service(comment_id=comment_id, principal_id=current_user.id, db=db)
