from abc import ABC, abstractmethod

from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    One storage transaction spanning the user and session repositories.

    Use cases enter it with ``async with``, call ``commit()`` once their writes
    are complete, and simply return on an error: leaving the block discards
    whatever was not committed.
    """

    # Bound on __aenter__
    users: IUserRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb):
        """Roll back anything uncommitted. Never suppresses the exception."""
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
