from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.password_hasher import PasswordHasher
from src.domain.base import utcnow
from src.domain.entities import UserStatus
from src.domain.records import SessionOwner, SessionRecord, UserRecord

KNOWN_PASSWORD = "Abc12345!"


@pytest.fixture(scope="session")
def hasher():
    # Cheapest cost bcrypt accepts
    return PasswordHasher(rounds=4)


@pytest.fixture(scope="session")
def known_hash(hasher):
    return hasher.hash(KNOWN_PASSWORD)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_uuid = AsyncMock(return_value=None)
    uow.users.email_exists = AsyncMock(return_value=False)
    uow.users.username_exists = AsyncMock(return_value=False)
    uow.users.create = AsyncMock()
    uow.users.update_password = AsyncMock(return_value=True)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.find_by_token = AsyncMock(return_value=None)
    uow.sessions.touch_activity = AsyncMock(return_value=True)
    uow.sessions.invalidate = AsyncMock(return_value=False)
    uow.sessions.invalidate_all_for_user = AsyncMock(return_value=0)
    uow.sessions.sweep_expired = AsyncMock(return_value=0)
    uow.sessions.list_active_for_user = AsyncMock(return_value=[])
    uow.sessions.rotate = AsyncMock(return_value=None)
    return uow


@pytest.fixture
def make_user(known_hash):
    def _make(**overrides) -> UserRecord:
        fields = dict(
            id=1,
            uuid="8b1c0a52-2a4e-4f0e-9a47-3f1f2f6c9d10",
            username="alice",
            email="alice@example.com",
            password_hash=known_hash,
            full_name="Alice Example",
            status=UserStatus.active,
            created_at=utcnow(),
            updated_at=utcnow(),
        )
        fields.update(overrides)
        return UserRecord(**fields)

    return _make


@pytest.fixture
def make_session():
    def _make(user: UserRecord = None, **overrides) -> SessionRecord:
        now = utcnow()
        owner = None
        if user is not None:
            owner = SessionOwner(
                id=user.id,
                uuid=user.uuid,
                username=user.username,
                email=user.email,
                full_name=user.full_name,
                status=user.status,
            )
        fields = dict(
            id=10,
            user_id=user.id if user is not None else 1,
            session_token="s" * 128,
            refresh_token="r" * 128,
            expires_at=now + timedelta(hours=24),
            last_activity=now,
            created_at=now,
            owner=owner,
        )
        fields.update(overrides)
        return SessionRecord(**fields)

    return _make
