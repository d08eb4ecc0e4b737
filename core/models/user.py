# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for accounts:
# - RegisterRequest / LoginRequest: Credentials coming in
# - UserUpdate: Partial profile edits
# - UserProfile: Output when returning a user to clients
#
# The password hash never leaves the service layer.
# =============================================================================

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lib.utils import ensure_utc

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FitnessLevel(str, Enum):
    """Self-reported training experience; drives the base workout intensity."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class FitnessGoal(str, Enum):
    """What the user is training for."""
    LOSE_WEIGHT = "lose_weight"
    BUILD_MUSCLE = "build_muscle"
    MAINTAIN = "maintain"
    ENDURANCE = "endurance"


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class RegisterRequest(BaseModel):
    """
    Schema for creating an account.

    Example:
        {
            "name": "Alex",
            "email": "alex@example.com",
            "password": "correct-horse",
            "fitness_level": "intermediate",
            "goal": "build_muscle"
        }
    """
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    goal: FitnessGoal = FitnessGoal.MAINTAIN
    daily_calorie_target: int = Field(default=2000, ge=800, le=10000)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class LoginRequest(BaseModel):
    """Email + password login."""
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserUpdate(BaseModel):
    """Partial profile update. Omitted fields are left unchanged."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    fitness_level: FitnessLevel | None = None
    goal: FitnessGoal | None = None
    daily_calorie_target: int | None = Field(default=None, ge=800, le=10000)


class UserProfile(BaseModel):
    """Public view of a user account."""
    id: str
    name: str
    email: str
    fitness_level: FitnessLevel
    goal: FitnessGoal
    daily_calorie_target: int
    created_at: datetime | None = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "UserProfile":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            fitness_level=doc.get("fitness_level", FitnessLevel.BEGINNER),
            goal=doc.get("goal", FitnessGoal.MAINTAIN),
            daily_calorie_target=doc.get("daily_calorie_target", 2000),
            created_at=ensure_utc(doc.get("created_at")),
        )
