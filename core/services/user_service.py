# =============================================================================
# core/services/user_service.py - Account Business Logic
# =============================================================================
# Registration, credential checks and profile edits against the `users`
# collection. Separates HTTP concerns from database/business logic.
# =============================================================================

import asyncio
import logging
from typing import Any

from pymongo.errors import DuplicateKeyError

from app.exceptions import ConflictError, UnauthorizedError
from core.models.user import RegisterRequest, UserProfile, UserUpdate
from lib.security import hash_password, verify_password
from lib.utils import parse_object_id, utc_now

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An account with this email already exists."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


class UserService:
    """
    Service for account operations.

    Args:
        database: MongoDB database handle shared by the application
    """

    def __init__(self, database: Any):
        self.collection = database.users

    async def register(self, request: RegisterRequest) -> UserProfile:
        """
        Create an account.

        Raises:
            ConflictError: If the email is already registered
        """
        if await self.collection.find_one({"email": request.email}):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        # PBKDF2 is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, request.password)

        doc = {
            "name": request.name,
            "email": request.email,
            "password_hash": password_hash,
            "fitness_level": request.fitness_level.value,
            "goal": request.goal.value,
            "daily_calorie_target": request.daily_calorie_target,
            "created_at": utc_now(),
        }

        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        doc["_id"] = result.inserted_id
        logger.info(f"Registered user: {doc['_id']}")
        return UserProfile.from_document(doc)

    async def authenticate(self, email: str, password: str) -> UserProfile:
        """
        Check credentials.

        Unknown email and wrong password produce the same error.

        Raises:
            UnauthorizedError: If the credentials don't match an account
        """
        doc = await self.collection.find_one({"email": email.strip().lower()})
        if doc is None:
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        valid = await asyncio.to_thread(verify_password, password, doc.get("password_hash", ""))
        if not valid:
            logger.info(f"Failed login for user: {doc['_id']}")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        return UserProfile.from_document(doc)

    async def get_user(self, user_id: str) -> UserProfile | None:
        """Fetch a user by id, or None if it doesn't exist."""
        oid = parse_object_id(user_id)
        if oid is None:
            return None

        doc = await self.collection.find_one({"_id": oid})
        return UserProfile.from_document(doc) if doc else None

    async def update_user(self, user_id: str, update: UserUpdate) -> UserProfile:
        """
        Apply a partial profile update.

        Raises:
            UnauthorizedError: If the account no longer exists
        """
        changes = update.model_dump(exclude_none=True, mode="json")
        oid = parse_object_id(user_id)

        if oid is not None and changes:
            await self.collection.update_one({"_id": oid}, {"$set": changes})
            logger.info(f"Updated user {user_id}: {sorted(changes)}")

        user = await self.get_user(user_id)
        if user is None:
            raise UnauthorizedError("Account no longer exists.")
        return user
