"""
User Management DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.device_info import DeviceInfo


class ChangePasswordCommand(BaseModel):
    user_uuid: str
    requesting_user_id: int
    current_password: str = Field(repr=False)
    new_password: str = Field(repr=False)
    confirm_new_password: str = Field(repr=False)


class ChangePasswordResponse(BaseModel):
    message: str


class ActiveSessionInfo(BaseModel):
    """One of the caller's sessions. Tokens are never listed."""

    id: int
    current: bool
    device_info: Optional[DeviceInfo] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    expires_at: datetime
    last_activity: Optional[datetime] = None
    created_at: Optional[datetime] = None


class ActiveSessionsResponse(BaseModel):
    sessions: List[ActiveSessionInfo]
