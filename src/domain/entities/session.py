"""
Session Entity

One row per login lineage. Deleting the row is the only way to end a session.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - opaque bearer token plus its refresh token.

    Business Rules:
    - session_token and refresh_token are unique and stored in separate columns
    - Valid only while now < expires_at (absolute, not sliding)
    - last_activity is informational and never extends expiry
    - Refresh rotates both tokens in place on the same row
    - Device info is stored as serialized JSON text
    """

    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    session_token: str = Field(unique=True, index=True, max_length=128)
    refresh_token: str = Field(unique=True, index=True, max_length=128)

    # Client metadata
    device_info: Optional[str] = Field(default=None, sa_column=Column(Text))
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_activity: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_activity", "user_id", "last_activity"),
    )
