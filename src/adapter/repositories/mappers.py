"""
Row-to-record mapping.

The only place ORM entities are turned into the typed records the rest of the
service works with.
"""

from typing import Optional

from src.domain.base import as_utc
from src.domain.device_info import decode_device_info
from src.domain.entities import Session, User
from src.domain.records import SessionOwner, SessionRecord, UserRecord


def to_user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        uuid=user.uuid,
        username=user.username,
        email=user.email,
        password_hash=user.password_hash,
        full_name=user.full_name,
        phone_number=user.phone_number,
        status=user.status,
        created_at=as_utc(user.created_at),
        updated_at=as_utc(user.updated_at),
    )


def to_session_owner(user: User) -> SessionOwner:
    return SessionOwner(
        id=user.id,
        uuid=user.uuid,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        status=user.status,
    )


def to_session_record(session_obj: Session, owner: Optional[User] = None) -> SessionRecord:
    return SessionRecord(
        id=session_obj.id,
        user_id=session_obj.user_id,
        session_token=session_obj.session_token,
        refresh_token=session_obj.refresh_token,
        device_info=decode_device_info(session_obj.device_info),
        ip_address=session_obj.ip_address,
        user_agent=session_obj.user_agent,
        expires_at=as_utc(session_obj.expires_at),
        last_activity=as_utc(session_obj.last_activity),
        created_at=as_utc(session_obj.created_at),
        owner=to_session_owner(owner) if owner is not None else None,
    )
