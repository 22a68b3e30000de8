"""Admin use cases for system administration operations."""

from .sweep_expired_sessions_use_case import (
    SweepExpiredSessionsResponse,
    SweepExpiredSessionsUseCase,
)

__all__ = [
    "SweepExpiredSessionsUseCase",
    "SweepExpiredSessionsResponse",
]
