"""
Admin API Key Authentication

Validates admin API keys for maintenance endpoints.
"""

import secrets

from fastapi import Header, Request, status
from src.api.error import ClientError
from src.libs.result import Error


async def verify_admin_api_key(request: Request, x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used by operators and schedulers, not end users. Separate from session
    authentication.

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    valid_admin_key = request.app.state.config.ADMIN_API_KEY

    if not valid_admin_key or not secrets.compare_digest(x_admin_api_key, valid_admin_key):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
