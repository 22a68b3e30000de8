from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.device_info import encode_device_info
from src.domain.entities import Session, User
from src.domain.records import ClientMetadata, SessionRecord
from .mappers import to_session_record


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find_with_owner(self, *conditions) -> Optional[SessionRecord]:
        stmt = (
            select(Session, User)
            .join(User, Session.user_id == User.id)
            .where(*conditions)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        row = result.first()
        if row is None:
            return None
        session_obj, owner = row
        return to_session_record(session_obj, owner)

    async def create(
        self,
        user_id: int,
        session_token: str,
        refresh_token: str,
        metadata: Optional[ClientMetadata] = None,
        ttl_hours: int = 24,
    ) -> SessionRecord:
        """Create a new session"""
        metadata = metadata or ClientMetadata()
        now = utcnow()
        session_obj = Session(
            user_id=user_id,
            session_token=session_token,
            refresh_token=refresh_token,
            device_info=encode_device_info(metadata.device_info),
            ip_address=metadata.ip_address,
            user_agent=metadata.user_agent,
            expires_at=now + timedelta(hours=ttl_hours),
            last_activity=now,
            created_at=now,
        )
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return to_session_record(session_obj)

    async def find_by_token(self, session_token: str) -> Optional[SessionRecord]:
        """Get unexpired session by session token, owner joined"""
        return await self._find_with_owner(
            Session.session_token == session_token,
            Session.expires_at > utcnow(),
        )

    async def touch_activity(self, session_token: str) -> bool:
        """Update last activity timestamp"""
        stmt = (
            update(Session)
            .where(Session.session_token == session_token)
            .values(last_activity=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def invalidate(self, session_token: str) -> bool:
        """Delete a specific session by token"""
        stmt = (
            delete(Session)
            .where(Session.session_token == session_token)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def invalidate_all_for_user(self, user_id: int) -> int:
        """Delete all sessions for a user"""
        stmt = (
            delete(Session)
            .where(Session.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def sweep_expired(self) -> int:
        """Delete all expired sessions"""
        stmt = (
            delete(Session)
            .where(Session.expires_at <= utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def list_active_for_user(self, user_id: int) -> List[SessionRecord]:
        """Get unexpired sessions for a user, most recently active first"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id, Session.expires_at > utcnow())
            .order_by(Session.last_activity.desc(), Session.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return [to_session_record(s) for s in result.all()]

    async def rotate(
        self,
        refresh_token: str,
        new_session_token: str,
        new_refresh_token: str,
        expires_at: datetime,
    ) -> Optional[SessionRecord]:
        """Swap both tokens in place, guarded by refresh token and expiry"""
        now = utcnow()
        stmt = (
            update(Session)
            .where(Session.refresh_token == refresh_token, Session.expires_at > now)
            .values(
                session_token=new_session_token,
                refresh_token=new_refresh_token,
                expires_at=expires_at,
                last_activity=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None

        await self.session.flush()
        return await self._find_with_owner(Session.session_token == new_session_token)
