from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from cms_admin.core.security import get_current_active_user
from cms_admin.models.user import User
from cms_admin.schemas.comment import (
    CommentDefaultViewModel,
    CommentReplyRequest,
    CommentStatusUpdate,
    FailureReason,
    ModerationResult,
)
from cms_admin.services.moderation import CommentModerationService, get_moderation_service

router = APIRouter()

FAILURE_STATUS_CODES = {
    FailureReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureReason.CONFLICT: status.HTTP_409_CONFLICT,
    FailureReason.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

def raise_for_failure(result: ModerationResult) -> ModerationResult:
    """Turn a failed moderation result into an HTTP error"""
    if not result:
        raise HTTPException(
            status_code=FAILURE_STATUS_CODES[result.reason],
            detail={"reason": result.reason.value, "message": result.detail}
        )
    return result

@router.get("", response_model=CommentDefaultViewModel, summary="List all comments grouped by status")
async def list_comments(
    current_user: Annotated[User, Depends(get_current_active_user)],
    service: Annotated[CommentModerationService, Depends(get_moderation_service)]
):
    """List all comments with per-status counts"""
    return await service.get_all_comments()

@router.put("/{comment_id}/status", response_model=ModerationResult, summary="Change a comment's moderation status")
async def update_comment_status(
    comment_id: int,
    status_update: CommentStatusUpdate,
    current_user: Annotated[User, Depends(get_current_active_user)],
    service: Annotated[CommentModerationService, Depends(get_moderation_service)]
):
    """Update the moderation status of a comment"""
    result = await service.update_comment_status(comment_id, status_update.status)
    return raise_for_failure(result)

@router.post("/reply", response_model=ModerationResult, status_code=status.HTTP_201_CREATED, summary="Reply to a comment")
async def reply_comment(
    reply: CommentReplyRequest,
    current_user: Annotated[User, Depends(get_current_active_user)],
    service: Annotated[CommentModerationService, Depends(get_moderation_service)]
):
    """Reply to a comment as the current user; the reply starts out pending"""
    result = await service.reply_comment(reply, current_user)
    return raise_for_failure(result)
