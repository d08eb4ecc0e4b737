# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication for the API.
#
# Usage:
#   from app.auth import CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    CurrentUser,
    create_access_token,
    decode_access_token,
    get_current_user,
)
from app.auth.models import AuthResponse, TokenPayload, UserEnvelope

__all__ = [
    "CurrentUser",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "AuthResponse",
    "TokenPayload",
    "UserEnvelope",
]
