import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """UnitOfWork over one AsyncSession. Re-enterable: each block is its own transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.debug("Rolling back after %s", exc_type.__name__)
        if self.session.in_transaction():
            await self.rollback()
        return False

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
