"""
Authentication Use Cases

Registration, login, logout, session refresh and identity resolution.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_session_use_case import RefreshSessionUseCase
from .resolve_identity_use_case import ResolveIdentityUseCase
from .dtos import (
    AuthContext,
    CurrentSession,
    CurrentUser,
    LoginCommand,
    LoginResponse,
    LogoutResponse,
    RefreshSessionResponse,
    RegisterCommand,
    RegisterResponse,
    SessionTokens,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshSessionUseCase",
    "ResolveIdentityUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "LoginCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "LogoutResponse",
    "RefreshSessionResponse",
    # DTOs - Nested Models
    "SessionTokens",
    "AuthContext",
    "CurrentUser",
    "CurrentSession",
]
