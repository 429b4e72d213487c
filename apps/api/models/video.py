"""Video model for published uploads."""

from sqlalchemy import Boolean, Column, String, DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
import uuid

from database import Base, utcnow


class Video(Base):
    """Uploaded video owned by a channel (user)."""

    __tablename__ = "videos"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    video_file = Column(String, nullable=False)
    thumbnail = Column(String, nullable=False)
    duration = Column(Float, nullable=False, default=0.0)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    owner = relationship("User", back_populates="videos")
