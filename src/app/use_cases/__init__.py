"""
Use Cases

Organized by domain folder:
- auth/: Registration, login, logout, refresh, identity resolution
- users/: Password change and session management
- admin/: Maintenance operations

Import from subdirectories for better organization.
"""

from .auth import (
    LoginUseCase,
    LogoutUseCase,
    RefreshSessionUseCase,
    RegisterUseCase,
    ResolveIdentityUseCase,
)
from .users import (
    ChangePasswordUseCase,
    ListSessionsUseCase,
    RevokeSessionsUseCase,
)
from .admin import SweepExpiredSessionsUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshSessionUseCase",
    "ResolveIdentityUseCase",
    # Users
    "ChangePasswordUseCase",
    "ListSessionsUseCase",
    "RevokeSessionsUseCase",
    # Admin
    "SweepExpiredSessionsUseCase",
]
