"""Tweet model for short channel posts."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from database import Base, utcnow


class Tweet(Base):
    __tablename__ = "tweets"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)
