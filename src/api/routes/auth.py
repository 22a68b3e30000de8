from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.api.utils.client_info import extract_client_metadata
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginCommand,
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshSessionResponse,
    RefreshSessionUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
)
from src.depends import (
    get_config,
    get_password_hasher,
    get_session_token,
    get_unit_of_work,
)

router = APIRouter(prefix="/users", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Accepts camelCase aliases used by existing clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="Password")
    confirm_password: str = Field(
        ..., alias="confirmPassword", description="Password confirmation"
    )
    full_name: str = Field(
        ..., min_length=1, max_length=255, alias="fullName", description="Display name"
    )
    phone_number: Optional[str] = Field(
        default=None, max_length=32, alias="phoneNumber", description="Phone number"
    )


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    User Registration

    Creates a new user account. The password hash is never returned.

    Raises:
        - 400 Bad Request: Missing fields or password policy failure (itemized)
        - 409 Conflict: Email or username already exists
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        username=request.username,
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
        full_name=request.full_name,
        phone_number=request.phone_number,
    )

    use_case = RegisterUseCase(uow, hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_FAILED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in (
            "EMAIL_ALREADY_EXISTS",
            "USERNAME_ALREADY_EXISTS",
            "USER_ALREADY_EXISTS",
        ):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    config=Depends(get_config),
):
    """
    User Login

    Verifies credentials and opens a session. Returns the session token (sent
    as a bearer token on later requests) and the refresh token.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account not active
        - 500 Internal Server Error: SESSION_CREATION_FAILED or server error
    """
    command = LoginCommand(
        email=request.email,
        password=request.password,
        client=extract_client_metadata(http_request),
    )

    use_case = LoginUseCase(uow, hasher, session_ttl_hours=config.SESSION_TTL_HOURS)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "ACCOUNT_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Deletes the session identified by the bearer token (or a session_token
    body field).

    Raises:
        - 400 Bad Request: No session token supplied
        - 404 Not Found: Session not found or already ended
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == "TOKEN_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class RefreshSessionRequest(BaseModel):
    """
    Refresh session HTTP request payload
    """

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(
        ..., min_length=1, alias="refreshToken", description="Refresh token"
    )


@router.post(
    "/refresh-session",
    status_code=status.HTTP_200_OK,
    response_model=RefreshSessionResponse,
)
async def refresh_session(
    request: RefreshSessionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Refresh Session

    Exchanges a refresh token for a new session/refresh token pair. Both old
    tokens stop working.

    Raises:
        - 401 Unauthorized: Invalid, expired or already-used refresh token
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshSessionUseCase(uow, session_ttl_hours=config.SESSION_TTL_HOURS)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_REFRESH_TOKEN":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
