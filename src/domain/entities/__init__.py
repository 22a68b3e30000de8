"""
Finly Domain Entities

Table entities, one per file. Only the adapter layer reads or writes them;
everything above it works with the typed records in src.domain.records.
"""

from .enums import UserStatus
from .user import User
from .session import Session

__all__ = [
    # Enums
    "UserStatus",
    # Entities
    "User",
    "Session",
]
