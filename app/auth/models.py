# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for tokens and auth responses.
# =============================================================================

from pydantic import BaseModel

from core.models.user import UserProfile


class TokenPayload(BaseModel):
    """
    Decoded access token payload.

    Standard JWT claims issued by this API.
    """
    sub: str  # User ID
    email: str | None = None
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp


class AuthResponse(BaseModel):
    """Returned by register and login."""
    success: bool = True
    token: str
    user: UserProfile


class UserEnvelope(BaseModel):
    """Returned by the profile endpoints."""
    success: bool = True
    user: UserProfile
