"""
Register Use Case

Creates a user account after password policy and uniqueness checks.
"""

import logging

from sqlalchemy.exc import IntegrityError

from src.app.services.password_hasher import PasswordHasher
from src.app.services.password_policy import validate_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import HashingError
from src.libs.result import Error, Result, Return
from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Use case for user registration.

    Business Rules:
    1. Password must pass every policy rule and match its confirmation
    2. Email and username are pre-checked for a friendly conflict error
    3. The table's unique constraints remain the source of truth: a race that
       slips past the pre-check is rolled back and reported as a conflict
    4. Password hashed with bcrypt before storage
    5. New accounts start with status=active
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with the submitted account fields

        Returns:
            Result[RegisterResponse] with the user summary,
            or Error(VALIDATION_FAILED | EMAIL_ALREADY_EXISTS |
            USERNAME_ALREADY_EXISTS | USER_ALREADY_EXISTS | HASHING_FAILED)
        """
        validation = validate_password(command.password, command.confirm_password)
        if not validation.valid:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    "Password validation failed",
                    details=validation.errors,
                )
            )

        async with self.uow:
            if await self.uow.users.email_exists(command.email):
                return Return.err(
                    Error(
                        "EMAIL_ALREADY_EXISTS",
                        "A user with this email address already exists",
                    )
                )

            if await self.uow.users.username_exists(command.username):
                return Return.err(
                    Error(
                        "USERNAME_ALREADY_EXISTS",
                        "A user with this username already exists",
                    )
                )

            try:
                password_hash = self.hasher.hash(command.password)
            except HashingError:
                logger.exception("Password hashing failed during registration")
                return Return.err(Error("HASHING_FAILED", "Failed to hash password"))

            try:
                user = await self.uow.users.create(
                    username=command.username,
                    email=command.email,
                    password_hash=password_hash,
                    full_name=command.full_name,
                    phone_number=command.phone_number,
                )
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                logger.warning("Duplicate user rejected by storage constraint")
                return Return.err(
                    Error(
                        "USER_ALREADY_EXISTS",
                        "Duplicate entry for username or email",
                    )
                )

            logger.info("User registered: %s", user.uuid)

            return Return.ok(
                RegisterResponse(
                    message="User created successfully", user=user.to_summary()
                )
            )
