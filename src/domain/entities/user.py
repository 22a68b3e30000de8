"""
User Entity

A person holding a Finly account. All financial data hangs off this row.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_uuid, utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - identity and hashed credentials.

    Business Rules:
    - Internal integer id is never exposed; external references use uuid
    - Email and username are unique across all users
    - Password stored as bcrypt hash, never plaintext
    - Only status=active users may hold working sessions
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: str = Field(
        default_factory=generate_uuid, unique=True, index=True, max_length=36
    )
    username: str = Field(unique=True, index=True, max_length=50)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    full_name: str = Field(max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=32)

    status: UserStatus = Field(default=UserStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_status", "status"),)
