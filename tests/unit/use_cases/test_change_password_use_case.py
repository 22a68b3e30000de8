"""
Unit tests for Change Password Use Case
"""

from unittest.mock import MagicMock

import pytest

from src.app.services.password_hasher import PasswordHasher
from src.app.use_cases.users import ChangePasswordCommand, ChangePasswordUseCase
from src.domain.errors import HashingError

USER_UUID = "8b1c0a52-2a4e-4f0e-9a47-3f1f2f6c9d10"


def _command(**overrides) -> ChangePasswordCommand:
    fields = dict(
        user_uuid=USER_UUID,
        requesting_user_id=1,
        current_password="Abc12345!",
        new_password="NewPass123!",
        confirm_new_password="NewPass123!",
    )
    fields.update(overrides)
    return ChangePasswordCommand(**fields)


@pytest.mark.asyncio
async def test_change_password_success(mock_uow, hasher, make_user):
    mock_uow.users.get_by_uuid.return_value = make_user()

    result = await ChangePasswordUseCase(mock_uow, hasher).execute(_command())

    assert result.is_ok()
    assert result.value.message == "Password changed successfully"
    user_id, new_hash = mock_uow.users.update_password.call_args.args
    assert user_id == 1
    assert hasher.verify("NewPass123!", new_hash)
    mock_uow.commit.assert_called_once()
    mock_uow.sessions.invalidate_all_for_user.assert_not_called()


@pytest.mark.asyncio
async def test_change_password_unknown_user(mock_uow, hasher):
    result = await ChangePasswordUseCase(mock_uow, hasher).execute(_command())

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_change_password_for_someone_else(mock_uow, hasher, make_user):
    mock_uow.users.get_by_uuid.return_value = make_user(id=2)

    result = await ChangePasswordUseCase(mock_uow, hasher).execute(_command())

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.users.update_password.assert_not_called()


@pytest.mark.asyncio
async def test_change_password_wrong_current_password(mock_uow, hasher, make_user):
    mock_uow.users.get_by_uuid.return_value = make_user()

    result = await ChangePasswordUseCase(mock_uow, hasher).execute(
        _command(current_password="Wrong123!")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CURRENT_PASSWORD"
    assert result.error.message == "Current password is incorrect"


@pytest.mark.asyncio
async def test_change_password_policy_failure(mock_uow, hasher, make_user):
    mock_uow.users.get_by_uuid.return_value = make_user()

    result = await ChangePasswordUseCase(mock_uow, hasher).execute(
        _command(new_password="weak", confirm_new_password="weak")
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    assert result.error.message == "New password validation failed"
    assert "Password must be at least 8 characters long" in result.error.details


@pytest.mark.asyncio
async def test_change_password_confirmation_mismatch(mock_uow, hasher, make_user):
    mock_uow.users.get_by_uuid.return_value = make_user()

    result = await ChangePasswordUseCase(mock_uow, hasher).execute(
        _command(confirm_new_password="NewPass123?")
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    assert result.error.details == ["Password and confirm password do not match"]


@pytest.mark.asyncio
async def test_change_password_to_same_password(mock_uow, hasher, make_user):
    mock_uow.users.get_by_uuid.return_value = make_user()

    result = await ChangePasswordUseCase(mock_uow, hasher).execute(
        _command(new_password="Abc12345!", confirm_new_password="Abc12345!")
    )

    assert result.is_err()
    assert result.error.code == "PASSWORD_UNCHANGED"
    mock_uow.users.update_password.assert_not_called()


@pytest.mark.asyncio
async def test_change_password_hashing_failure(mock_uow, make_user):
    mock_uow.users.get_by_uuid.return_value = make_user()
    hasher = MagicMock(spec=PasswordHasher)
    hasher.verify.side_effect = [True, False]
    hasher.hash.side_effect = HashingError("boom")

    result = await ChangePasswordUseCase(mock_uow, hasher).execute(_command())

    assert result.is_err()
    assert result.error.code == "HASHING_FAILED"
    mock_uow.commit.assert_not_called()
