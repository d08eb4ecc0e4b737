# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .workout_service import WorkoutService
from .progress_service import ProgressService
from .nutrition_service import NutritionService
from .motivation_service import MotivationService

__all__ = [
    "UserService",
    "WorkoutService",
    "ProgressService",
    "NutritionService",
    "MotivationService",
]
