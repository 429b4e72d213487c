"""User model."""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
import uuid

from database import Base, utcnow


class User(Base):
    """Account owned by the auth service; read here for profiles and history."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, nullable=False, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    fullname = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    cover_image = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    videos = relationship("Video", back_populates="owner")
    watch_history = relationship(
        "WatchHistoryEntry",
        back_populates="user",
        order_by="WatchHistoryEntry.created_at",
    )
