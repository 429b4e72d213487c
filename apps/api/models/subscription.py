"""Subscription model linking a subscriber to a channel."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from database import Base, utcnow


class Subscription(Base):
    """Subscriber follows channel; both sides are users."""

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    subscriber_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    channel_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
