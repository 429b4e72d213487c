"""Subscription router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models.user import User
from routers.auth_scope import get_current_user
from services.envelope import ApiResponse
from services.subscriptions import (
    list_channel_subscribers_service,
    list_subscribed_channels_service,
    toggle_subscription_service,
)

router = APIRouter()


@router.post("/c/{channel_id}", response_model=ApiResponse)
async def toggle_subscription(
    channel_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await toggle_subscription_service(channel_id=channel_id, principal_id=current_user.id, db=db)


@router.get("/c/{channel_id}", response_model=ApiResponse)
async def get_user_channel_subscribers(
    channel_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_channel_subscribers_service(channel_id=channel_id, db=db)


@router.get("/u/{subscriber_id}", response_model=ApiResponse)
async def get_subscribed_channels(
    subscriber_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_subscribed_channels_service(subscriber_id=subscriber_id, db=db)
