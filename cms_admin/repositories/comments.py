from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from cms_admin.models.comment import Comment

class CommentRepository:
    """Store access for comments"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_with_relations(self) -> List[Comment]:
        """All comments with author and post loaded, in id order"""
        stmt = (
            select(Comment)
            .options(selectinload(Comment.user), selectinload(Comment.post))
            .order_by(Comment.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, comment_id: int) -> Optional[Comment]:
        # raises MultipleResultsFound if the id is not unique
        result = await self.session.execute(select(Comment).where(Comment.id == comment_id))
        return result.scalar_one_or_none()

    async def add(self, comment: Comment) -> Comment:
        self.session.add(comment)
        await self.session.flush()
        return comment

    async def update(self, comment: Comment) -> Comment:
        self.session.add(comment)
        await self.session.flush()
        return comment
