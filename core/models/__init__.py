# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Accounts and profiles
# - workout.py: Workout sessions and recommendations
# - progress.py: Body measurements and summary
# - nutrition.py: Meal logs and daily totals
# - motivation.py: Quotes and streaks
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import (
    FitnessGoal,
    FitnessLevel,
    LoginRequest,
    RegisterRequest,
    UserProfile,
    UserUpdate,
)
from .workout import (
    Exercise,
    IntensityAdjustment,
    WorkoutRecommendation,
    WorkoutSession,
    WorkoutSessionComplete,
    WorkoutSessionCreate,
    WorkoutStatus,
    WorkoutType,
)
from .progress import ProgressEntry, ProgressEntryCreate, ProgressSummary
from .nutrition import Meal, MealCreate, MealType, NutritionSummary
from .motivation import Quote, Streak

__all__ = [
    # User
    "FitnessGoal",
    "FitnessLevel",
    "LoginRequest",
    "RegisterRequest",
    "UserProfile",
    "UserUpdate",
    # Workout
    "Exercise",
    "IntensityAdjustment",
    "WorkoutRecommendation",
    "WorkoutSession",
    "WorkoutSessionComplete",
    "WorkoutSessionCreate",
    "WorkoutStatus",
    "WorkoutType",
    # Progress
    "ProgressEntry",
    "ProgressEntryCreate",
    "ProgressSummary",
    # Nutrition
    "Meal",
    "MealCreate",
    "MealType",
    "NutritionSummary",
    # Motivation
    "Quote",
    "Streak",
]
