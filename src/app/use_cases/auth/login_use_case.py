"""
Login Use Case

Verifies credentials and opens a new session with a fresh token pair.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_issuer import issue_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import HashingError
from src.libs.result import Error, Result, Return
from .dtos import LoginCommand, LoginResponse, SessionTokens

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password produce the same error
    - User must have status=active
    - Session and refresh tokens are two independent random draws
    - Session expires session_ttl_hours after login (absolute)
    - A storage failure after credentials were accepted is reported as
      SESSION_CREATION_FAILED, distinct from a failed login
    """

    def __init__(
        self, uow: UnitOfWork, hasher: PasswordHasher, session_ttl_hours: int = 24
    ):
        self.uow = uow
        self.hasher = hasher
        self.session_ttl_hours = session_ttl_hours

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with email, password and client metadata

        Returns:
            Result with LoginResponse containing user summary and tokens, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)

            try:
                if user is None:
                    # Keep timing identical to a wrong password
                    self.hasher.burn(command.password)
                    return Return.err(INVALID_CREDENTIALS)

                password_valid = self.hasher.verify(command.password, user.password_hash)
            except HashingError:
                logger.exception("Password verification failed during login")
                return Return.err(
                    Error("HASHING_FAILED", "Failed to verify credentials")
                )

            if not password_valid:
                return Return.err(INVALID_CREDENTIALS)

            if not user.is_active:
                return Return.err(
                    Error(
                        "ACCOUNT_INACTIVE",
                        "Account is not active. Please contact support.",
                    )
                )

            session_token = issue_token()
            refresh_token = issue_token()

            try:
                session = await self.uow.sessions.create(
                    user_id=user.id,
                    session_token=session_token,
                    refresh_token=refresh_token,
                    metadata=command.client,
                    ttl_hours=self.session_ttl_hours,
                )
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception("Session creation failed for user %s", user.uuid)
                return Return.err(
                    Error(
                        "SESSION_CREATION_FAILED",
                        "Login successful but session creation failed",
                    )
                )

            logger.info("User %s logged in, session %s", user.uuid, session.id)

            return Return.ok(
                LoginResponse(
                    message="Login successful",
                    user=user.to_summary(),
                    session=SessionTokens(
                        session_token=session_token,
                        refresh_token=refresh_token,
                        expires_at=session.expires_at,
                    ),
                )
            )
