"""Channel subscription toggle and listings."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models.subscription import Subscription
from models.user import User
from services.envelope import ApiResponse, api_response
from services.errors import NotFoundError
from services.pipelines import list_channel_subscribers, list_subscribed_channels
from services.toggles import toggle_relation
from services.validation import require_id

logger = logging.getLogger(__name__)


async def _require_channel(db: AsyncSession, channel_id: str) -> User:
    channel = await db.get(User, channel_id)
    if channel is None:
        raise NotFoundError("channel not found")
    return channel


async def toggle_subscription_service(*, channel_id: str, principal_id: str, db: AsyncSession) -> ApiResponse:
    channel_id = require_id(channel_id, "channel")
    await _require_channel(db, channel_id)

    result = await toggle_relation(
        db,
        Subscription,
        {"subscriber_id": principal_id, "channel_id": channel_id},
    )
    logger.info("subscription_toggle user=%s channel=%s subscribed=%s", principal_id, channel_id, result.created)
    if result.created:
        return api_response("subscribed", "subscribed successfully")
    return api_response("unsubscribed", "unsubscribed successfully")


async def list_channel_subscribers_service(*, channel_id: str, db: AsyncSession) -> ApiResponse:
    channel_id = require_id(channel_id, "channel")
    await _require_channel(db, channel_id)

    subscribers = await list_channel_subscribers(db, channel_id)
    if not subscribers and settings.EMPTY_SUBSCRIBERS_IS_ERROR:
        raise NotFoundError("This channel have no subscribers yet")
    return api_response(
        {"subscribers": subscribers, "total_subscribers": len(subscribers)},
        "subscribers fetched successfully",
    )


async def list_subscribed_channels_service(*, subscriber_id: str, db: AsyncSession) -> ApiResponse:
    subscriber_id = require_id(subscriber_id, "subscriber")
    channels = await list_subscribed_channels(db, subscriber_id)
    return api_response(
        {"channels": channels, "total_channels": len(channels)},
        "subscribed channel fetched successfully",
    )
