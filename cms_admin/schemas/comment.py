from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional
from cms_admin.models.comment import CommentStatus
from cms_admin.schemas.post import PostResponse
from cms_admin.schemas.user import UserViewModel

class CommentDto(BaseModel):
    """Comment data as seen by moderators"""
    id: int = Field(..., description="Comment ID")
    parent_id: Optional[int] = Field(None, description="Parent comment ID")
    post_id: int = Field(..., description="Post ID")
    user_id: str = Field(..., description="Author ID")
    content: str = Field(..., description="Comment content")
    status: CommentStatus = Field(..., description="Moderation status")
    created_at: datetime = Field(..., description="Created at")
    updated_at: datetime = Field(..., description="Updated at")

    class Config:
        from_attributes = True

class CommentViewModel(BaseModel):
    """One row of the moderation list"""
    user: UserViewModel
    post: PostResponse
    comment: CommentDto

class CommentDefaultViewModel(BaseModel):
    """All comments, bucketed by moderation status"""
    all_comments: List[CommentViewModel] = Field(default_factory=list)
    number_of_comments: int = 0
    approved_comments: List[CommentViewModel] = Field(default_factory=list)
    number_of_approved_comments: int = 0
    pending_comments: List[CommentViewModel] = Field(default_factory=list)
    number_of_pending_comments: int = 0
    spam_comments: List[CommentViewModel] = Field(default_factory=list)
    number_of_spam_comments: int = 0
    deleted_comments: List[CommentViewModel] = Field(default_factory=list)
    number_of_deleted_comments: int = 0

class CommentStatusUpdate(BaseModel):
    """Status update request"""
    status: CommentStatus = Field(..., description="Target moderation status")

class CommentReplyRequest(BaseModel):
    """Reply request"""
    post_id: int = Field(..., description="Post ID")
    parent_id: Optional[int] = Field(None, description="Comment being replied to")
    comment_body: str = Field(..., min_length=1, description="Reply content")

class FailureReason(str, Enum):
    """Why a moderation write did not go through"""
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"

class ModerationResult(BaseModel):
    """Outcome of a moderation write, truthy on success"""
    success: bool
    reason: Optional[FailureReason] = None
    detail: Optional[str] = None
    comment_id: Optional[int] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, comment_id: int) -> "ModerationResult":
        return cls(success=True, comment_id=comment_id)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str) -> "ModerationResult":
        return cls(success=False, reason=reason, detail=detail)
