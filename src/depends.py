import json
import logging
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, ServerError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthContext, ResolveIdentityUseCase

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

BODY_TOKEN_FIELDS = ("session_token", "sessionToken")


def get_config(request: Request):
    return request.app.state.config


async def get_unit_of_work(request: Request):
    async with request.app.state.database.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher(request: Request) -> PasswordHasher:
    return PasswordHasher(rounds=request.app.state.config.BCRYPT_ROUNDS)


async def _token_from_body(request: Request) -> Optional[str]:
    body = await request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    for field in BODY_TOKEN_FIELDS:
        token = payload.get(field)
        if isinstance(token, str) and token:
            return token
    return None


async def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """
    Locate the caller's session token.

    Looks at the Authorization: Bearer header first, then falls back to a
    session_token field in a JSON body for clients that cannot set headers.
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return await _token_from_body(request)


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AuthContext:
    """
    Authentication gate for protected routes.

    Resolves the bearer session token to the calling user and stores the
    identity on request.state for downstream handlers.

    Raises:
        ClientError: 401 for a missing/unknown/expired token,
                     403 if the account is not active
        ServerError: 500 if the session could not be verified
    """
    use_case = ResolveIdentityUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHENTICATED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "ACCOUNT_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    context = result.value
    request.state.user = context.user
    request.state.session = context.session
    return context


async def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Optional[AuthContext]:
    """Same resolution as get_current_user, but never fails the request"""
    if not token:
        return None

    try:
        result = await ResolveIdentityUseCase(uow).execute(token)
    except SQLAlchemyError:
        logger.warning("Optional authentication skipped", exc_info=True)
        return None

    if result.is_err():
        return None

    context = result.value
    request.state.user = context.user
    request.state.session = context.session
    return context

