# taskboard/api/auth.py
from fastapi import APIRouter, Depends, Request

from taskboard.api.dependencies import get_auth_service
from taskboard.core.rate_limit_config import RATE_LIMITS, limiter
from taskboard.models.auth import LoginRequest, LoginResponse
from taskboard.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    credentials: LoginRequest,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Exchange email and password for a session token.

    Unknown email and wrong password produce the same 401 response.
    """
    issued = await auth.login(credentials.email, credentials.password)
    return LoginResponse(token=issued.token)
