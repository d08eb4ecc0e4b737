# =============================================================================
# core/models/nutrition.py - Nutrition Log Schemas
# =============================================================================
# Meals are grouped by their UTC calendar day ("YYYY-MM-DD"), stored on
# each document so daily queries are plain equality matches.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lib.utils import ensure_utc


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class MealCreate(BaseModel):
    """
    Schema for logging a meal.

    Example:
        {"name": "Oats", "meal_type": "breakfast", "calories": 350, "protein_g": 12}
    """
    name: str = Field(..., min_length=1, max_length=100)
    meal_type: MealType
    calories: int = Field(..., ge=0, le=10000)
    protein_g: float = Field(default=0, ge=0, le=1000)
    carbs_g: float = Field(default=0, ge=0, le=1000)
    fat_g: float = Field(default=0, ge=0, le=1000)
    eaten_at: datetime | None = None

    @field_validator("eaten_at")
    @classmethod
    def to_utc(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v)


class Meal(BaseModel):
    """Schema for returning a logged meal."""
    id: str
    name: str
    meal_type: MealType
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    eaten_at: datetime
    day: str

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Meal":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            meal_type=doc["meal_type"],
            calories=doc["calories"],
            protein_g=doc.get("protein_g", 0),
            carbs_g=doc.get("carbs_g", 0),
            fat_g=doc.get("fat_g", 0),
            eaten_at=ensure_utc(doc["eaten_at"]),
            day=doc["day"],
        )


class NutritionSummary(BaseModel):
    """Macro totals for one day against the user's calorie target."""
    day: str
    calories: int = 0
    protein_g: float = 0
    carbs_g: float = 0
    fat_g: float = 0
    target_calories: int
    remaining_calories: int
    meals: int = 0
