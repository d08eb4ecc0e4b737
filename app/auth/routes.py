# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Account registration, login and profile endpoints.
# Mounted at /api/auth.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from app.auth.dependencies import CurrentUser, create_access_token
from app.auth.models import AuthResponse, UserEnvelope
from app.body import parse_body
from app.dependencies import ContextDep, UserServiceDep
from core.models.user import LoginRequest, RegisterRequest, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    context: ContextDep,
    users: UserServiceDep,
    body: Annotated[RegisterRequest, Depends(parse_body(RegisterRequest))],
) -> AuthResponse:
    """
    Create an account and return an access token.

    Raises:
        409: If the email is already registered
    """
    user = await users.register(body)
    return AuthResponse(token=create_access_token(user, context.settings), user=user)


@router.post("/login", response_model=AuthResponse)
async def login(
    context: ContextDep,
    users: UserServiceDep,
    body: Annotated[LoginRequest, Depends(parse_body(LoginRequest))],
) -> AuthResponse:
    """
    Exchange email and password for an access token.

    Raises:
        401: If the credentials don't match
    """
    user = await users.authenticate(body.email, body.password)
    logger.info(f"User logged in: {user.id}")
    return AuthResponse(token=create_access_token(user, context.settings), user=user)


@router.get("/me", response_model=UserEnvelope)
async def get_me(user: CurrentUser) -> UserEnvelope:
    """Get the current user's profile."""
    return UserEnvelope(user=user)


@router.put("/me", response_model=UserEnvelope)
async def update_me(
    user: CurrentUser,
    users: UserServiceDep,
    body: Annotated[UserUpdate, Depends(parse_body(UserUpdate))],
) -> UserEnvelope:
    """Update name, fitness level, goal or calorie target."""
    updated = await users.update_user(user.id, body)
    return UserEnvelope(user=updated)
