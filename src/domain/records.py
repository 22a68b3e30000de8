"""
Typed records returned by repositories.

Repositories map table rows into these immutable records at the storage
boundary; use cases and the API never see ORM entities.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .device_info import DeviceInfo
from .entities.enums import UserStatus


class UserSummary(BaseModel):
    """Public view of a user - safe to serialize"""

    uuid: str
    username: str
    email: str
    full_name: str
    phone_number: Optional[str] = None
    status: UserStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserRecord(BaseModel):
    """Full user row including the password hash"""

    model_config = ConfigDict(frozen=True)

    id: int
    uuid: str
    username: str
    email: str
    password_hash: str = Field(repr=False)
    full_name: str
    phone_number: Optional[str] = None
    status: UserStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.active

    def to_summary(self) -> UserSummary:
        """Strip the hash and the internal id before crossing the API boundary"""
        return UserSummary(
            uuid=self.uuid,
            username=self.username,
            email=self.email,
            full_name=self.full_name,
            phone_number=self.phone_number,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class SessionOwner(BaseModel):
    """Identity fields of the user owning a session, joined on lookup"""

    model_config = ConfigDict(frozen=True)

    id: int
    uuid: str
    username: str
    email: str
    full_name: str
    status: UserStatus


class SessionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    session_token: str = Field(repr=False)
    refresh_token: str = Field(repr=False)
    device_info: Optional[DeviceInfo] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    expires_at: datetime
    last_activity: Optional[datetime] = None
    created_at: Optional[datetime] = None
    owner: Optional[SessionOwner] = None


class ClientMetadata(BaseModel):
    """Request-derived metadata stored alongside a new session"""

    model_config = ConfigDict(frozen=True)

    device_info: Optional[DeviceInfo] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
