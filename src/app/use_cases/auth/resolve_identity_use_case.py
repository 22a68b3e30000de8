"""
Resolve Identity Use Case

Turns a presented session token into the identity of the calling user.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserStatus
from src.libs.result import Error, Result, Return
from .dtos import AuthContext, CurrentSession, CurrentUser

logger = logging.getLogger(__name__)

# Same error for a missing, unknown or expired token
UNAUTHENTICATED = Error("UNAUTHENTICATED", "Invalid or missing session token")


class ResolveIdentityUseCase:
    """
    Use case behind the authentication gate.

    Business Rules:
    - Missing, unknown and expired tokens are indistinguishable to the caller
    - Owner status other than active: ACCOUNT_INACTIVE
    - Storage failure: AUTH_UNAVAILABLE, never reported as a bad token
    - last_activity is touched best-effort; a failed touch never fails the request
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: str) -> Result[AuthContext]:
        if not session_token:
            return Return.err(UNAUTHENTICATED)

        async with self.uow:
            try:
                session = await self.uow.sessions.find_by_token(session_token)
            except SQLAlchemyError:
                logger.exception("Session lookup failed")
                return Return.err(
                    Error("AUTH_UNAVAILABLE", "Could not verify session")
                )

            if session is None or session.owner is None:
                return Return.err(UNAUTHENTICATED)

            owner = session.owner
            if owner.status != UserStatus.active:
                return Return.err(
                    Error("ACCOUNT_INACTIVE", "Account is not active")
                )

            await self._touch(session_token)

            return Return.ok(
                AuthContext(
                    user=CurrentUser(
                        id=owner.id,
                        uuid=owner.uuid,
                        username=owner.username,
                        email=owner.email,
                        full_name=owner.full_name,
                        status=owner.status,
                    ),
                    session=CurrentSession(
                        id=session.id,
                        token=session_token,
                        expires_at=session.expires_at,
                        last_activity=session.last_activity,
                        device_info=session.device_info,
                        ip_address=session.ip_address,
                        user_agent=session.user_agent,
                    ),
                )
            )

    async def _touch(self, session_token: str) -> None:
        try:
            await self.uow.sessions.touch_activity(session_token)
            await self.uow.commit()
        except SQLAlchemyError:
            logger.warning("Could not update session activity", exc_info=True)
            await self.uow.rollback()
