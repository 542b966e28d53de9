from datetime import datetime, UTC
from typing import Optional
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cms_admin.db.database import Base
from cms_admin.models.post import Post
from cms_admin.models.user import User
import enum

class CommentStatus(str, enum.Enum):
    """Comment moderation status"""
    APPROVED = "APPROVED"  # Approved, visible on the post
    PENDING = "PENDING"  # Waiting for a moderator
    SPAM = "SPAM"  # Flagged as spam
    TRASH = "TRASH"  # Moved to trash, the row is kept

class Comment(Base):
    """Comment model"""
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    parent_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("comments.id"), nullable=True)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id"))
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"))
    content: Mapped[str] = mapped_column(Text)
    status: Mapped[CommentStatus] = mapped_column(
        Enum(CommentStatus),
        default=CommentStatus.PENDING,
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC)
    )

    post: Mapped[Post] = relationship()
    user: Mapped[User] = relationship()
