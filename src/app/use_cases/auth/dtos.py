"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.device_info import DeviceInfo
from src.domain.entities import UserStatus
from src.domain.records import ClientMetadata, UserSummary


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent, created by the API layer"""

    username: str
    email: str
    password: str = Field(repr=False)
    confirm_password: str = Field(repr=False)
    full_name: str
    phone_number: Optional[str] = None


class LoginCommand(BaseModel):
    email: str
    password: str = Field(repr=False)
    client: ClientMetadata = Field(default_factory=ClientMetadata)


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for user registration use case"""

    message: str
    user: UserSummary


class SessionTokens(BaseModel):
    """Token pair handed to the client"""

    session_token: str
    refresh_token: str
    expires_at: datetime


class LoginResponse(BaseModel):
    """Response for user login use case"""

    message: str
    user: UserSummary
    session: SessionTokens


class LogoutResponse(BaseModel):
    message: str


class RefreshSessionResponse(BaseModel):
    """Response for session refresh use case"""

    message: str
    user_id: str  # public uuid of the owner
    session: SessionTokens


# ============================================================================
# Request identity
# ============================================================================


class CurrentUser(BaseModel):
    """Identity resolved from a session token for the duration of one request"""

    id: int = Field(exclude=True)
    uuid: str
    username: str
    email: str
    full_name: str
    status: UserStatus


class CurrentSession(BaseModel):
    id: int
    token: str = Field(exclude=True, repr=False)
    expires_at: datetime
    last_activity: Optional[datetime] = None
    device_info: Optional[DeviceInfo] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class AuthContext(BaseModel):
    user: CurrentUser
    session: CurrentSession
