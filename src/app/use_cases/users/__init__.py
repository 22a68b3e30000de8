"""
User Management Use Cases

Password change and session management for the signed-in user.
"""

from .change_password_use_case import ChangePasswordUseCase
from .list_sessions_use_case import ListSessionsUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .dtos import (
    ActiveSessionInfo,
    ActiveSessionsResponse,
    ChangePasswordCommand,
    ChangePasswordResponse,
)

__all__ = [
    "ChangePasswordUseCase",
    "ListSessionsUseCase",
    "RevokeSessionsUseCase",
    "ChangePasswordCommand",
    "ChangePasswordResponse",
    "ActiveSessionInfo",
    "ActiveSessionsResponse",
]
