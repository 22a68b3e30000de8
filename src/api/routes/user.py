from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.error import ClientError, ServerError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthContext
from src.app.use_cases.users import (
    ActiveSessionsResponse,
    ChangePasswordCommand,
    ChangePasswordResponse,
    ChangePasswordUseCase,
    ListSessionsUseCase,
    RevokeSessionsUseCase,
)
from src.depends import get_current_user, get_password_hasher, get_unit_of_work
from src.domain.device_info import DeviceInfo
from src.domain.entities import UserStatus

router = APIRouter(prefix="/users", tags=["User"])


class MeUser(BaseModel):
    uuid: str
    username: str
    email: str
    full_name: str
    status: UserStatus


class MeSession(BaseModel):
    id: int
    expires_at: datetime
    last_activity: Optional[datetime] = None
    device_info: Optional[DeviceInfo] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class MeResponse(BaseModel):
    """GET /users/me response payload. No internal user id, no token."""

    user: MeUser
    session: MeSession


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(current: AuthContext = Depends(get_current_user)):
    """
    Current User

    Returns the identity and session resolved from the bearer token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session token
        - 403 Forbidden: Account not active
    """
    return MeResponse(
        user=MeUser(**current.user.model_dump()),
        session=MeSession(**current.session.model_dump()),
    )


@router.get(
    "/me/sessions",
    status_code=status.HTTP_200_OK,
    response_model=ActiveSessionsResponse,
)
async def list_my_sessions(
    current: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Active Sessions

    Lists the caller's unexpired sessions, most recently active first.
    The session making the request is flagged as current.
    """
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(current.user.id, current.session.id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class RevokeSessionsResponse(BaseModel):
    """Response for session revocation"""

    message: str
    revoked_count: int


@router.post(
    "/me/sessions/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_all_my_sessions(
    current: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Log Out Everywhere

    Deletes every session of the caller, including the current one.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session token
        - 404 Not Found: User no longer exists
    """
    use_case = RevokeSessionsUseCase(uow)
    result = await use_case.revoke_all_sessions(current.user.id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    data = result.value
    return {
        "message": f"Successfully revoked {data['revoked_count']} session(s)",
        "revoked_count": data["revoked_count"],
    }


class ChangePasswordRequest(BaseModel):
    """Change password HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., min_length=1, alias="currentPassword")
    new_password: str = Field(..., min_length=1, alias="newPassword")
    confirm_new_password: str = Field(..., min_length=1, alias="confirmNewPassword")


@router.put(
    "/{user_uuid}/password",
    status_code=status.HTTP_200_OK,
    response_model=ChangePasswordResponse,
)
async def change_password(
    user_uuid: str,
    request: ChangePasswordRequest,
    current: AuthContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Change Password

    Raises:
        - 400 Bad Request: Policy failure or new password equals current
        - 401 Unauthorized: Not authenticated, or current password is wrong
        - 403 Forbidden: Changing another user's password
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    command = ChangePasswordCommand(
        user_uuid=user_uuid,
        requesting_user_id=current.user.id,
        current_password=request.current_password,
        new_password=request.new_password,
        confirm_new_password=request.confirm_new_password,
    )

    use_case = ChangePasswordUseCase(uow, hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVALID_CURRENT_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("VALIDATION_FAILED", "PASSWORD_UNCHANGED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
