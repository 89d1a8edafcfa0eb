"""Auth Routes — login and current-user lookup.

Invariants:
    - POST /api/auth/login: 400 with `errors` for missing fields, 401 for bad
      credentials, otherwise {token, user: {id, username}}
    - GET /api/auth/me requires a bearer credential
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from crm.api.dependencies import bearer_token, get_auth_service
from crm.schemas.auth import LoginResponse, UserOut
from crm.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: Any = Body(None),
    service: AuthService = Depends(get_auth_service),
):
    return await service.login({} if payload is None else payload)


@router.get("/me", response_model=UserOut)
async def me(
    token: str = Depends(bearer_token),
    service: AuthService = Depends(get_auth_service),
):
    """The user the presented credential was issued to."""
    return await service.current_user(token)
