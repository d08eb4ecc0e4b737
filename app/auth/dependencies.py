# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Issues and verifies HS256 access tokens and resolves the current user.
#
# Usage:
#   from app.auth import CurrentUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

import logging
from datetime import timedelta
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.auth.models import TokenPayload
from app.config import Settings
from app.dependencies import ContextDep, UserServiceDep
from app.exceptions import UnauthorizedError
from core.models.user import UserProfile
from lib.utils import utc_now

logger = logging.getLogger(__name__)

# Missing headers are reported by get_current_user, not by HTTPBearer
security = HTTPBearer(auto_error=False)


def create_access_token(user: UserProfile, settings: Settings) -> str:
    """Sign an access token for `user`."""
    issued_at = utc_now()
    claims = {
        "sub": user.id,
        "email": user.email,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> TokenPayload:
    """
    Verify a token's signature and expiry.

    Raises:
        UnauthorizedError: If the token is invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return TokenPayload.model_validate(payload)

    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        raise UnauthorizedError("Token has expired.")

    except (JWTError, ValidationError) as e:
        logger.warning(f"Access token validation failed: {e}")
        raise UnauthorizedError("Invalid token.")


async def get_current_user(
    context: ContextDep,
    users: UserServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserProfile:
    """
    Resolve the user behind the Bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies signature and expiry
    3. Loads the account, rejecting tokens for deleted users

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid or stale
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required.")

    payload = decode_access_token(credentials.credentials, context.settings)

    user = await users.get_user(payload.sub)
    if user is None:
        logger.warning(f"Token for unknown user: {payload.sub}")
        raise UnauthorizedError("Invalid token.")

    logger.debug(f"Authenticated user: {user.id}")
    return user


CurrentUser = Annotated[UserProfile, Depends(get_current_user)]
