from sqlalchemy import Column, ForeignKey, Integer, String, Enum, DateTime
from cms_admin.db.database import Base
from datetime import datetime, UTC
from enum import Enum as PyEnum

class PostStatus(str, PyEnum):
    """Post status"""
    DRAFT = "DRAFT"         # Draft, only visible to the author
    ACTIVE = "ACTIVE"       # Published, visible to everyone and can be commented
    MODIFYING = "MODIFYING" # Being edited, existing comments stay visible
    ARCHIVED = "ARCHIVED"   # Archived, visible to everyone

class Post(Base):
    """Post model, read-only from the moderation side"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    title = Column(String, nullable=False)
    content = Column(String, nullable=False)
    status = Column(Enum(PostStatus), nullable=False, default=PostStatus.DRAFT)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))
