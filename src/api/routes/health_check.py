from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.app.use_cases.auth import AuthContext
from src.depends import get_optional_user

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """Liveness plus a storage round trip"""
    if await request.app.state.database.ping():
        return {"status": "ok", "database": "connected"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "degraded", "database": "unreachable"},
    )


@router.get("/")
async def welcome(current: Optional[AuthContext] = Depends(get_optional_user)):
    """Welcome message, personalized when a valid session token is sent"""
    if current is None:
        return {"message": "Welcome to Finly Backend", "user": None}
    return {
        "message": f"Welcome back, {current.user.full_name}",
        "user": current.user.username,
    }
