"""Comment moderation: listing by status, status updates and replies."""
import logging
from typing import Iterable, List
from fastapi import Depends
from sqlalchemy.exc import IntegrityError, MultipleResultsFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from cms_admin.db.database import get_session
from cms_admin.db.unit_of_work import UnitOfWork
from cms_admin.models.comment import Comment, CommentStatus
from cms_admin.models.user import User
from cms_admin.repositories.comments import CommentRepository
from cms_admin.repositories.posts import PostRepository
from cms_admin.schemas.comment import (
    CommentDefaultViewModel,
    CommentDto,
    CommentReplyRequest,
    CommentViewModel,
    FailureReason,
    ModerationResult,
)
from cms_admin.schemas.post import PostResponse
from cms_admin.schemas.user import UserViewModel

logger = logging.getLogger(__name__)


class ModerationError(Exception):
    """Base class for expected moderation failures"""
    reason: FailureReason

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CommentNotFoundError(ModerationError):
    reason = FailureReason.NOT_FOUND

    def __init__(self, comment_id: int):
        super().__init__(f"Comment {comment_id} not found")


class PostNotFoundError(ModerationError):
    reason = FailureReason.NOT_FOUND

    def __init__(self, post_id: int):
        super().__init__(f"Post {post_id} not found")


def classify_store_error(exc: SQLAlchemyError) -> FailureReason:
    """Map a store fault to the reason reported to callers"""
    if isinstance(exc, (MultipleResultsFound, IntegrityError)):
        return FailureReason.CONFLICT
    return FailureReason.STORE_UNAVAILABLE


def to_view_model(comment: Comment) -> CommentViewModel:
    return CommentViewModel(
        user=UserViewModel.model_validate(comment.user),
        post=PostResponse.model_validate(comment.post),
        comment=CommentDto.model_validate(comment),
    )


def comments_by_status(comments: Iterable[CommentViewModel], status: CommentStatus) -> List[CommentViewModel]:
    return [cm for cm in comments if cm.comment.status == status]


class CommentModerationService:
    def __init__(self, uow: UnitOfWork, comments: CommentRepository, posts: PostRepository):
        self.uow = uow
        self.comments = comments
        self.posts = posts

    async def get_all_comments(self) -> CommentDefaultViewModel:
        """List every comment, grouped by moderation status.

        Store faults are not caught here.
        """
        comments = [to_view_model(c) for c in await self.comments.list_with_relations()]

        approved = comments_by_status(comments, CommentStatus.APPROVED)
        pending = comments_by_status(comments, CommentStatus.PENDING)
        spam = comments_by_status(comments, CommentStatus.SPAM)
        deleted = comments_by_status(comments, CommentStatus.TRASH)

        return CommentDefaultViewModel(
            all_comments=comments,
            number_of_comments=len(comments),
            approved_comments=approved,
            number_of_approved_comments=len(approved),
            pending_comments=pending,
            number_of_pending_comments=len(pending),
            spam_comments=spam,
            number_of_spam_comments=len(spam),
            deleted_comments=deleted,
            number_of_deleted_comments=len(deleted),
        )

    async def update_comment_status(self, comment_id: int, status: CommentStatus) -> ModerationResult:
        """Overwrite a comment's status. Any status may follow any other."""
        status = CommentStatus(status)
        try:
            async with self.uow.transaction():
                comment = await self.comments.get_by_id(comment_id)
                if comment is None:
                    raise CommentNotFoundError(comment_id)
                comment.status = status
                await self.comments.update(comment)
        except ModerationError as e:
            logger.warning("Status update rejected: %s", e.message)
            return ModerationResult.failed(e.reason, e.message)
        except SQLAlchemyError as e:
            logger.exception("Status update of comment %s failed", comment_id)
            return ModerationResult.failed(classify_store_error(e), str(e))

        logger.info("Comment %s moved to %s", comment_id, status.value)
        return ModerationResult.ok(comment_id)

    async def reply_comment(self, reply: CommentReplyRequest, current_user: User) -> ModerationResult:
        """Post a reply as ``current_user``; replies always start out pending."""
        # only the id is used, the user may belong to another session
        author_id = current_user.id
        try:
            async with self.uow.transaction():
                post = await self.posts.get_by_id(reply.post_id)
                if post is None:
                    raise PostNotFoundError(reply.post_id)
                comment = Comment(
                    parent_id=reply.parent_id,
                    post=post,
                    status=CommentStatus.PENDING,
                    content=reply.comment_body,
                    user_id=author_id,
                )
                await self.comments.add(comment)
                comment_id = comment.id
        except ModerationError as e:
            logger.warning("Reply rejected: %s", e.message)
            return ModerationResult.failed(e.reason, e.message)
        except SQLAlchemyError as e:
            logger.exception("Reply by user %s to post %s failed", author_id, reply.post_id)
            return ModerationResult.failed(classify_store_error(e), str(e))

        logger.info("User %s replied to comment %s on post %s", author_id, reply.parent_id, reply.post_id)
        return ModerationResult.ok(comment_id)


def get_moderation_service(session: AsyncSession = Depends(get_session)) -> CommentModerationService:
    """FastAPI dependency building the service over the request's session"""
    return CommentModerationService(
        UnitOfWork(session),
        CommentRepository(session),
        PostRepository(session),
    )
