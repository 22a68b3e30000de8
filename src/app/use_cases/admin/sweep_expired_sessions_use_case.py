"""
Use Case: Sweep Expired Sessions

Deletes every session past its expiry. Run on demand through the admin API
and periodically by the background sweeper.
"""

import logging

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)


class SweepExpiredSessionsResponse(BaseModel):
    """Response DTO for SweepExpiredSessionsUseCase"""

    deleted_count: int


class SweepExpiredSessionsUseCase:
    """
    Remove expired sessions.

    Business Logic:
    1. Delete all rows with expires_at <= now in one statement
    2. Return the number of rows deleted

    Safe to run alongside any other session operation: deleting an expired or
    already-deleted row is a no-op. A second sweep right after returns 0.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[SweepExpiredSessionsResponse]:
        async with self.uow:
            deleted = await self.uow.sessions.sweep_expired()
            await self.uow.commit()

        if deleted:
            logger.info("Swept %d expired session(s)", deleted)
        return Return.ok(SweepExpiredSessionsResponse(deleted_count=deleted))
