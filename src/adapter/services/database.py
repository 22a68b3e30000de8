"""
Storage client.

One Database per process, built by the application factory and disposed in
its lifespan. Everything that needs storage gets it from here.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401  (registers tables on SQLModel.metadata)

logger = logging.getLogger(__name__)


class Database:
    """Async engine plus the session factory bound to it"""

    def __init__(self, uri: str, echo: bool = False):
        self.uri = uri
        self.engine = create_async_engine(uri, echo=echo, future=True)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.warning("Database ping failed", exc_info=True)
            return False

    async def dispose(self):
        await self.engine.dispose()
