from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import UserStatus
from src.domain.records import UserRecord


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        """Get user by internal ID"""
        pass

    @abstractmethod
    async def get_by_uuid(self, user_uuid: str) -> Optional[UserRecord]:
        """Get user by public UUID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        """Get user by username"""
        pass

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Check whether any user already holds this email"""
        pass

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        """Check whether any user already holds this username"""
        pass

    @abstractmethod
    async def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        full_name: str,
        phone_number: Optional[str] = None,
        status: UserStatus = UserStatus.active,
    ) -> UserRecord:
        """Insert a new user. Raises IntegrityError on a duplicate key."""
        pass

    @abstractmethod
    async def update_password(self, user_id: int, password_hash: str) -> bool:
        """Replace the stored hash. Returns True if the user existed."""
        pass
