"""Like model with a tagged polymorphic target."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, UniqueConstraint

from database import Base, utcnow


LIKE_TARGET_KINDS = ("video", "comment", "tweet")


class Like(Base):
    """One user's like on exactly one video, comment or tweet."""

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("liked_by", "target_type", "target_id", name="uq_likes_liked_by_target"),
        CheckConstraint(
            "target_type IN ('video', 'comment', 'tweet')",
            name="ck_likes_target_type",
        ),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    liked_by = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    target_type = Column(String, nullable=False)
    target_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
