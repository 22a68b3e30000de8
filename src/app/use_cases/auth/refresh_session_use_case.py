"""
Refresh Session Use Case

Exchanges a refresh token for a new token pair, rotating the session in place.
"""

import logging
from datetime import timedelta

from src.app.services.token_issuer import issue_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import RefreshSessionResponse, SessionTokens

logger = logging.getLogger(__name__)


class RefreshSessionUseCase:
    """
    Use case for refreshing a session.

    Business Rules:
    - Refresh token rotation: both tokens are overwritten on the same row
    - The old session token and old refresh token stop working immediately
    - One row per login lineage, never a growing chain
    - Expired or unknown refresh token: INVALID_REFRESH_TOKEN
    - Two concurrent refreshes with the same token: the conditional update lets
      exactly one through, the other sees no matching row
    """

    def __init__(self, uow: UnitOfWork, session_ttl_hours: int = 24):
        self.uow = uow
        self.session_ttl_hours = session_ttl_hours

    async def execute(self, refresh_token: str) -> Result[RefreshSessionResponse]:
        """
        Execute refresh session use case.

        Args:
            refresh_token: The refresh token to rotate

        Returns:
            Result with RefreshSessionResponse containing the new pair, or Error
        """
        invalid = Error("INVALID_REFRESH_TOKEN", "Invalid or expired refresh token")
        if not refresh_token:
            return Return.err(invalid)

        async with self.uow:
            new_session_token = issue_token()
            new_refresh_token = issue_token()
            expires_at = utcnow() + timedelta(hours=self.session_ttl_hours)

            session = await self.uow.sessions.rotate(
                refresh_token,
                new_session_token=new_session_token,
                new_refresh_token=new_refresh_token,
                expires_at=expires_at,
            )
            if session is None:
                return Return.err(invalid)

            await self.uow.commit()

        logger.info("Session %s refreshed", session.id)

        return Return.ok(
            RefreshSessionResponse(
                message="Session refreshed successfully",
                user_id=session.owner.uuid,
                session=SessionTokens(
                    session_token=new_session_token,
                    refresh_token=new_refresh_token,
                    expires_at=session.expires_at,
                ),
            )
        )
