"""
Logout Use Case

Ends a session by deleting its row.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out a single session.

    Business Rules:
    - Deleting the row is the only invalidation mechanism
    - Logging out an unknown or already-ended session is SESSION_NOT_FOUND,
      never an exception
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: str) -> Result[LogoutResponse]:
        if not session_token:
            return Return.err(
                Error("TOKEN_REQUIRED", "Session token is required for logout")
            )

        async with self.uow:
            invalidated = await self.uow.sessions.invalidate(session_token)
            if not invalidated:
                return Return.err(
                    Error("SESSION_NOT_FOUND", "Session not found or already expired")
                )

            await self.uow.commit()

        logger.info("Session logged out")
        return Return.ok(LogoutResponse(message="Logout successful"))
