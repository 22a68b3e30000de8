"""
Change Password Use Case

Replaces a user's password after verifying the current one.
"""

import logging

from src.app.services.password_hasher import PasswordHasher
from src.app.services.password_policy import validate_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import HashingError
from src.libs.result import Error, Result, Return
from .dtos import ChangePasswordCommand, ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing a password.

    Business Rules:
    - Users can only change their own password
    - Current password must verify
    - New password must pass the same policy as registration
    - New password must differ from the current one
    - Existing sessions stay valid
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(
        self, command: ChangePasswordCommand
    ) -> Result[ChangePasswordResponse]:
        """
        Execute change password use case.

        Errors:
            - USER_NOT_FOUND: No user with this UUID
            - FORBIDDEN: Caller is not the target user
            - INVALID_CURRENT_PASSWORD: Current password does not verify
            - VALIDATION_FAILED: New password breaks policy (details itemized)
            - PASSWORD_UNCHANGED: New password equals the current one
            - HASHING_FAILED: bcrypt failure
        """
        async with self.uow:
            user = await self.uow.users.get_by_uuid(command.user_uuid)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.id != command.requesting_user_id:
                return Return.err(
                    Error("FORBIDDEN", "You can only change your own password")
                )

            try:
                if not self.hasher.verify(command.current_password, user.password_hash):
                    return Return.err(
                        Error(
                            "INVALID_CURRENT_PASSWORD",
                            "Current password is incorrect",
                        )
                    )

                validation = validate_password(
                    command.new_password, command.confirm_new_password
                )
                if not validation.valid:
                    return Return.err(
                        Error(
                            "VALIDATION_FAILED",
                            "New password validation failed",
                            details=validation.errors,
                        )
                    )

                if self.hasher.verify(command.new_password, user.password_hash):
                    return Return.err(
                        Error(
                            "PASSWORD_UNCHANGED",
                            "New password must be different from current password",
                        )
                    )

                new_hash = self.hasher.hash(command.new_password)
            except HashingError:
                logger.exception("Password hashing failed for user %s", user.uuid)
                return Return.err(Error("HASHING_FAILED", "Failed to hash password"))

            await self.uow.users.update_password(user.id, new_hash)
            await self.uow.commit()

            logger.info("Password changed for user %s", user.uuid)
            return Return.ok(
                ChangePasswordResponse(message="Password changed successfully")
            )
