from typing import Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.base import utcnow
from src.domain.entities import User, UserStatus
from src.domain.records import UserRecord
from .mappers import to_user_record


def normalize_email(email: str) -> str:
    """Emails are stored and compared lower-cased, so uniqueness ignores case"""
    return email.strip().lower()


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_one(self, *conditions) -> Optional[UserRecord]:
        stmt = (
            select(User)
            .where(*conditions)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        user = result.one_or_none()
        return to_user_record(user) if user is not None else None

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Get user by email address"""
        return await self._get_one(User.email == normalize_email(email))

    async def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        """Get user by internal ID"""
        return await self._get_one(User.id == user_id)

    async def get_by_uuid(self, user_uuid: str) -> Optional[UserRecord]:
        """Get user by public UUID"""
        return await self._get_one(User.uuid == user_uuid)

    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        """Get user by username"""
        return await self._get_one(User.username == username)

    async def email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == normalize_email(email))
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def username_exists(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        full_name: str,
        phone_number: Optional[str] = None,
        status: UserStatus = UserStatus.active,
    ) -> UserRecord:
        """Create a new user"""
        user = User(
            username=username,
            email=normalize_email(email),
            password_hash=password_hash,
            full_name=full_name,
            phone_number=phone_number,
            status=status,
        )
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return to_user_record(user)

    async def update_password(self, user_id: int, password_hash: str) -> bool:
        """Replace password hash and bump updated_at"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(password_hash=password_hash, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
