"""Read-only join/shape/paginate queries behind the listing and detail endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.comment import Comment
from models.like import Like
from models.subscription import Subscription
from models.tweet import Tweet
from models.user import User
from models.video import Video
from models.watch_history import WatchHistoryEntry


VIDEO_SORT_COLUMNS = {
    "created_at": Video.created_at,
    "updated_at": Video.updated_at,
    "title": Video.title,
    "views": Video.views,
    "duration": Video.duration,
}
SORT_KEY_ALIASES = {"createdAt": "created_at", "updatedAt": "updated_at"}


def _isoformat(value: Any) -> Optional[str]:
    return value.isoformat() if value else None


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _page_window(page: int, limit: int) -> tuple:
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    return (page - 1) * limit, limit


def _like_count(kind: str, target_column: Any):
    return (
        select(func.count(Like.id))
        .where(Like.target_type == kind, Like.target_id == target_column)
        .scalar_subquery()
    )


def public_profile(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "fullname": user.fullname,
        "avatar": user.avatar,
    }


def serialize_video(video: Video) -> Dict[str, Any]:
    return {
        "id": video.id,
        "title": video.title,
        "description": video.description,
        "video_file": video.video_file,
        "thumbnail": video.thumbnail,
        "duration": float(video.duration or 0.0),
        "views": int(video.views or 0),
        "is_published": bool(video.is_published),
        "owner_id": video.owner_id,
        "created_at": _isoformat(video.created_at),
        "updated_at": _isoformat(video.updated_at),
    }


def resolve_video_sort(sort_by: Optional[str], sort_type: Optional[str]) -> List[Any]:
    """Return ORDER BY clauses; unknown or missing keys keep insertion order."""
    insertion_order = [Video.created_at.asc(), Video.id.asc()]
    key = str(sort_by or "").strip()
    column = VIDEO_SORT_COLUMNS.get(SORT_KEY_ALIASES.get(key, key))
    if column is None:
        return insertion_order
    direction = column.asc() if str(sort_type or "").strip().lower() == "asc" else column.desc()
    return [direction, *insertion_order]


async def list_videos(
    db: AsyncSession,
    *,
    query: Optional[str] = None,
    owner_id: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_type: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> List[Dict[str, Any]]:
    stmt = select(Video, User).join(User, User.id == Video.owner_id)
    search = str(query or "").strip()
    if search:
        pattern = f"%{_escape_like(search)}%"
        stmt = stmt.where(
            or_(
                Video.title.ilike(pattern, escape="\\"),
                Video.description.ilike(pattern, escape="\\"),
            )
        )
    if owner_id:
        stmt = stmt.where(Video.owner_id == owner_id)

    offset, limit = _page_window(page, limit)
    stmt = stmt.order_by(*resolve_video_sort(sort_by, sort_type)).offset(offset).limit(limit)

    rows = (await db.execute(stmt)).all()
    items = []
    for video, owner in rows:
        item = serialize_video(video)
        item["owner"] = public_profile(owner)
        items.append(item)
    return items


async def get_video_detail(db: AsyncSession, video_id: str, principal_id: str) -> Optional[Dict[str, Any]]:
    """Video with owner profile, like and subscriber counts, and the caller's flags."""
    liked_by_caller = (
        select(func.count(Like.id))
        .where(
            Like.target_type == "video",
            Like.target_id == Video.id,
            Like.liked_by == principal_id,
        )
        .scalar_subquery()
    )
    subscriber_count = (
        select(func.count(Subscription.id))
        .where(Subscription.channel_id == Video.owner_id)
        .scalar_subquery()
    )
    subscribed_by_caller = (
        select(func.count(Subscription.id))
        .where(
            Subscription.channel_id == Video.owner_id,
            Subscription.subscriber_id == principal_id,
        )
        .scalar_subquery()
    )
    stmt = (
        select(
            Video,
            User,
            _like_count("video", Video.id).label("total_likes"),
            liked_by_caller.label("liked_by_caller"),
            subscriber_count.label("total_subscribers"),
            subscribed_by_caller.label("subscribed_by_caller"),
        )
        .join(User, User.id == Video.owner_id)
        .where(Video.id == video_id)
    )
    row = (await db.execute(stmt)).first()
    if row is None:
        return None

    video, owner, total_likes, liked, total_subscribers, subscribed = row
    item = serialize_video(video)
    item.update(
        {
            "owner": public_profile(owner),
            "total_likes": int(total_likes or 0),
            "is_liked": bool(liked),
            "total_subscribers": int(total_subscribers or 0),
            "is_subscribed": bool(subscribed),
        }
    )
    return item


async def list_video_comments(
    db: AsyncSession,
    video_id: str,
    *,
    page: int = 1,
    limit: int = 10,
) -> List[Dict[str, Any]]:
    offset, limit = _page_window(page, limit)
    stmt = (
        select(Comment, User, _like_count("comment", Comment.id).label("likes"))
        .join(User, User.id == Comment.owner_id)
        .where(Comment.video_id == video_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .offset(offset)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).all()
    return [
        {
            "id": comment.id,
            "content": comment.content,
            "video_id": comment.video_id,
            "likes": int(likes or 0),
            "owner": public_profile(owner),
            "created_at": _isoformat(comment.created_at),
        }
        for comment, owner, likes in rows
    ]


async def list_channel_subscribers(db: AsyncSession, channel_id: str) -> List[Dict[str, Any]]:
    stmt = (
        select(Subscription, User)
        .join(User, User.id == Subscription.subscriber_id)
        .where(Subscription.channel_id == channel_id)
        .order_by(Subscription.created_at.asc(), Subscription.id.asc())
    )
    rows = (await db.execute(stmt)).all()
    return [
        {"subscriber": public_profile(user), "subscribed_at": _isoformat(subscription.created_at)}
        for subscription, user in rows
    ]


async def list_subscribed_channels(db: AsyncSession, subscriber_id: str) -> List[Dict[str, Any]]:
    stmt = (
        select(Subscription, User)
        .join(User, User.id == Subscription.channel_id)
        .where(Subscription.subscriber_id == subscriber_id)
        .order_by(Subscription.created_at.asc(), Subscription.id.asc())
    )
    rows = (await db.execute(stmt)).all()
    return [
        {"channel": public_profile(user), "subscribed_at": _isoformat(subscription.created_at)}
        for subscription, user in rows
    ]


async def list_liked_videos(db: AsyncSession, principal_id: str) -> List[Dict[str, Any]]:
    stmt = (
        select(Like, Video, User)
        .join(Video, Video.id == Like.target_id)
        .join(User, User.id == Video.owner_id)
        .where(Like.target_type == "video", Like.liked_by == principal_id)
        .order_by(Like.created_at.desc(), Like.id.desc())
    )
    rows = (await db.execute(stmt)).all()
    return [
        {
            "id": video.id,
            "title": video.title,
            "thumbnail": video.thumbnail,
            "video_file": video.video_file,
            "description": video.description,
            "duration": float(video.duration or 0.0),
            "views": int(video.views or 0),
            "owner": public_profile(owner),
            "liked_at": _isoformat(like.created_at),
        }
        for like, video, owner in rows
    ]


async def list_user_tweets(db: AsyncSession, user_id: str) -> List[Dict[str, Any]]:
    stmt = (
        select(Tweet, User, _like_count("tweet", Tweet.id).label("likes"))
        .join(User, User.id == Tweet.owner_id)
        .where(Tweet.owner_id == user_id)
        .order_by(Tweet.created_at.desc(), Tweet.id.desc())
    )
    rows = (await db.execute(stmt)).all()
    return [
        {
            "id": tweet.id,
            "content": tweet.content,
            "likes": int(likes or 0),
            "owner": public_profile(owner),
            "created_at": _isoformat(tweet.created_at),
            "updated_at": _isoformat(tweet.updated_at),
        }
        for tweet, owner, likes in rows
    ]


async def list_watch_history(db: AsyncSession, user_id: str) -> List[Dict[str, Any]]:
    stmt = (
        select(WatchHistoryEntry, Video, User)
        .join(Video, Video.id == WatchHistoryEntry.video_id)
        .join(User, User.id == Video.owner_id)
        .where(WatchHistoryEntry.user_id == user_id)
        .order_by(WatchHistoryEntry.created_at.desc(), WatchHistoryEntry.id.desc())
    )
    rows = (await db.execute(stmt)).all()
    items = []
    for entry, video, owner in rows:
        item = serialize_video(video)
        item["owner"] = public_profile(owner)
        item["watched_at"] = _isoformat(entry.created_at)
        items.append(item)
    return items
