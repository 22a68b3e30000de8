from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.records import ClientMetadata, SessionRecord


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(
        self,
        user_id: int,
        session_token: str,
        refresh_token: str,
        metadata: Optional[ClientMetadata] = None,
        ttl_hours: int = 24,
    ) -> SessionRecord:
        """Create a session expiring ttl_hours from now"""
        pass

    @abstractmethod
    async def find_by_token(self, session_token: str) -> Optional[SessionRecord]:
        """Unexpired session for a token, with its owner joined. None if absent or expired."""
        pass

    @abstractmethod
    async def touch_activity(self, session_token: str) -> bool:
        """Set last_activity to now. Returns True if a row was updated."""
        pass

    @abstractmethod
    async def invalidate(self, session_token: str) -> bool:
        """Delete a session. Returns False if it was already gone."""
        pass

    @abstractmethod
    async def invalidate_all_for_user(self, user_id: int) -> int:
        """Delete every session of a user. Returns count deleted."""
        pass

    @abstractmethod
    async def sweep_expired(self) -> int:
        """Delete every session with expires_at <= now. Returns count deleted."""
        pass

    @abstractmethod
    async def list_active_for_user(self, user_id: int) -> List[SessionRecord]:
        """Unexpired sessions for a user, most recently active first"""
        pass

    @abstractmethod
    async def rotate(
        self,
        refresh_token: str,
        new_session_token: str,
        new_refresh_token: str,
        expires_at: datetime,
    ) -> Optional[SessionRecord]:
        """
        Replace both tokens of the unexpired session holding refresh_token.

        Single conditional update: None when no row matched (unknown, expired,
        or already rotated by a concurrent caller).
        """
        pass
