from contextlib import asynccontextmanager
from typing import AsyncIterator
from sqlalchemy.ext.asyncio import AsyncSession


class UnitOfWork:
    """Transactional scope over a single session.

    Leaving ``transaction()`` normally commits everything flushed inside it;
    any exception rolls the session back and is re-raised to the caller.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            yield self.session
            await self.session.commit()
        except Exception:
            await self.rollback()
            raise

    async def rollback(self) -> None:
        await self.session.rollback()
