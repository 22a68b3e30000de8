"""
Revoke Sessions Use Case

Logs a user out everywhere.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for ending every session of a user.

    Business Rules:
    - Deletes all rows for the user, including the one making the call
    - Unknown user: USER_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def revoke_all_sessions(self, user_id: int) -> Result[dict]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            count = await self.uow.sessions.invalidate_all_for_user(user_id)
            await self.uow.commit()

        logger.info("Revoked %d session(s) for user %s", count, user.uuid)
        return Return.ok({"revoked_count": count})
