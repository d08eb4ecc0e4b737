# =============================================================================
# app/routers/nutrition.py - Nutrition Log Endpoints
# =============================================================================
# Meal logging and daily macro totals. Days are UTC calendar days.
# Mounted at /api/nutrition. All endpoints require authentication.
# =============================================================================

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import CurrentUser
from app.body import parse_body
from app.dependencies import NutritionServiceDep
from core.models.nutrition import MealCreate
from lib.utils import day_key, utc_now

router = APIRouter()

Day = Annotated[date | None, Query(description="UTC day (YYYY-MM-DD), defaults to today")]


def _resolve_day(day: date | None) -> str:
    return day_key(day or utc_now())


@router.post("", status_code=201)
async def log_meal(
    user: CurrentUser,
    nutrition: NutritionServiceDep,
    body: Annotated[MealCreate, Depends(parse_body(MealCreate))],
):
    """Log a meal with calories and macros."""
    meal = await nutrition.log_meal(user.id, body)
    return {"success": True, "meal": meal}


@router.get("")
async def list_meals(user: CurrentUser, nutrition: NutritionServiceDep, day: Day = None):
    """List a day's meals in the order they were eaten."""
    resolved = _resolve_day(day)
    meals = await nutrition.meals_for_day(user.id, resolved)
    return {"success": True, "day": resolved, "count": len(meals), "meals": meals}


@router.get("/summary")
async def get_summary(user: CurrentUser, nutrition: NutritionServiceDep, day: Day = None):
    """Daily totals against the user's calorie target."""
    summary = await nutrition.summary(user, _resolve_day(day))
    return {"success": True, "summary": summary}


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: Annotated[str, Path(description="Meal id")],
    user: CurrentUser,
    nutrition: NutritionServiceDep,
):
    await nutrition.delete_meal(user.id, meal_id)
    return {"success": True, "message": "Meal deleted."}
