"""Tweet services."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.tweet import Tweet
from services.cascade import delete_tweet_cascade
from services.envelope import ApiResponse, api_response
from services.ownership import get_owned_or_raise
from services.persistence import commit_or_raise
from services.pipelines import list_user_tweets
from services.validation import require_id, require_text

logger = logging.getLogger(__name__)


def serialize_tweet(tweet: Tweet) -> dict:
    return {
        "id": tweet.id,
        "content": tweet.content,
        "owner_id": tweet.owner_id,
        "created_at": tweet.created_at.isoformat() if tweet.created_at else None,
        "updated_at": tweet.updated_at.isoformat() if tweet.updated_at else None,
    }


async def create_tweet_service(*, principal_id: str, content: Optional[str], db: AsyncSession) -> ApiResponse:
    text = require_text(content, "Tweet")
    tweet = Tweet(content=text, owner_id=principal_id)
    db.add(tweet)
    await commit_or_raise(db, "Error while creating tweet")
    logger.info("tweet_create user=%s tweet=%s", principal_id, tweet.id)
    return api_response(serialize_tweet(tweet), "Tweet created successfully")


async def list_user_tweets_service(*, user_id: str, db: AsyncSession) -> ApiResponse:
    user_id = require_id(user_id, "user")
    tweets = await list_user_tweets(db, user_id)
    return api_response(tweets, "tweets fetched successfully")


async def update_tweet_service(
    *,
    tweet_id: str,
    principal_id: str,
    content: Optional[str],
    db: AsyncSession,
) -> ApiResponse:
    tweet_id = require_id(tweet_id, "tweet")
    text = require_text(content, "content")
    tweet = await get_owned_or_raise(db, Tweet, tweet_id, principal_id, label="tweet")

    tweet.content = text
    await commit_or_raise(db, "Error while updating tweet")
    return api_response(serialize_tweet(tweet), "tweet updated successfully")


async def delete_tweet_service(*, tweet_id: str, principal_id: str, db: AsyncSession) -> ApiResponse:
    tweet_id = require_id(tweet_id, "tweet")
    tweet = await get_owned_or_raise(db, Tweet, tweet_id, principal_id, label="tweet")
    await delete_tweet_cascade(db, tweet)
    return api_response({}, "deleted tweet successfully")
