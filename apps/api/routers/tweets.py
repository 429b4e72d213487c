"""Tweet router."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.user import User
from routers.auth_scope import get_current_user
from services.envelope import ApiResponse
from services.tweets import (
    create_tweet_service,
    delete_tweet_service,
    list_user_tweets_service,
    update_tweet_service,
)

router = APIRouter()


class TweetRequest(BaseModel):
    content: Optional[str] = None


@router.post("", response_model=ApiResponse)
async def create_tweet(
    request: TweetRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await create_tweet_service(principal_id=current_user.id, content=request.content, db=db)


@router.get("/user/{user_id}", response_model=ApiResponse)
async def get_user_tweets(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_user_tweets_service(user_id=user_id, db=db)


@router.patch("/{tweet_id}", response_model=ApiResponse)
async def update_tweet(
    tweet_id: str,
    request: TweetRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await update_tweet_service(
        tweet_id=tweet_id,
        principal_id=current_user.id,
        content=request.content,
        db=db,
    )


@router.delete("/{tweet_id}", response_model=ApiResponse)
async def delete_tweet(
    tweet_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await delete_tweet_service(tweet_id=tweet_id, principal_id=current_user.id, db=db)
