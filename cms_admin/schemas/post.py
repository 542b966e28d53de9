from pydantic import BaseModel, Field
from datetime import datetime
from cms_admin.models.post import PostStatus

class PostResponse(BaseModel):
    """Post as stored, attached to each moderated comment"""
    id: int = Field(..., description="Post ID")
    user_id: str = Field(..., description="Author ID")
    title: str = Field(..., description="Title")
    content: str = Field(..., description="Content")
    status: PostStatus = Field(..., description="Post status")
    created_at: datetime = Field(..., description="Created at")
    updated_at: datetime = Field(..., description="Updated at")

    class Config:
        from_attributes = True
