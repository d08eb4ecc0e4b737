# =============================================================================
# core/services/nutrition_service.py - Nutrition Log Business Logic
# =============================================================================

import logging
from typing import Any

from pymongo import ASCENDING

from app.exceptions import ResourceNotFoundError
from core.models.nutrition import Meal, MealCreate, NutritionSummary
from core.models.user import UserProfile
from lib.utils import day_key, parse_object_id, utc_now

logger = logging.getLogger(__name__)


class NutritionService:
    """Service for meal logs, grouped by UTC day."""

    def __init__(self, database: Any):
        self.collection = database.meals

    async def log_meal(self, user_id: str, request: MealCreate) -> Meal:
        """Log a meal; eaten_at defaults to now."""
        eaten_at = request.eaten_at or utc_now()
        doc = {
            "user_id": user_id,
            "name": request.name,
            "meal_type": request.meal_type.value,
            "calories": request.calories,
            "protein_g": request.protein_g,
            "carbs_g": request.carbs_g,
            "fat_g": request.fat_g,
            "eaten_at": eaten_at,
            "day": day_key(eaten_at),
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Logged {doc['meal_type']} ({doc['calories']} kcal) for user: {user_id}")
        return Meal.from_document(doc)

    async def meals_for_day(self, user_id: str, day: str) -> list[Meal]:
        """Meals eaten on a UTC day, in the order they were eaten."""
        cursor = self.collection.find(
            {"user_id": user_id, "day": day},
            sort=[("eaten_at", ASCENDING)],
        )
        docs = await cursor.to_list(length=None)
        return [Meal.from_document(doc) for doc in docs]

    async def summary(self, user: UserProfile, day: str) -> NutritionSummary:
        """Macro totals for a day against the user's calorie target."""
        meals = await self.meals_for_day(user.id, day)
        calories = sum(meal.calories for meal in meals)

        return NutritionSummary(
            day=day,
            calories=calories,
            protein_g=round(sum(meal.protein_g for meal in meals), 1),
            carbs_g=round(sum(meal.carbs_g for meal in meals), 1),
            fat_g=round(sum(meal.fat_g for meal in meals), 1),
            target_calories=user.daily_calorie_target,
            remaining_calories=user.daily_calorie_target - calories,
            meals=len(meals),
        )

    async def delete_meal(self, user_id: str, meal_id: str) -> None:
        """
        Delete a meal.

        Raises:
            ResourceNotFoundError: If it doesn't exist or isn't the user's
        """
        oid = parse_object_id(meal_id)
        deleted = 0
        if oid is not None:
            result = await self.collection.delete_one({"_id": oid, "user_id": user_id})
            deleted = result.deleted_count
        if not deleted:
            raise ResourceNotFoundError("Meal", meal_id)
        logger.info(f"Deleted meal {meal_id} for user: {user_id}")
