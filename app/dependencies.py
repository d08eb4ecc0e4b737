# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Any

from fastapi import Depends, Request

from app.context import AppContext
from core.services.motivation_service import MotivationService
from core.services.nutrition_service import NutritionService
from core.services.progress_service import ProgressService
from core.services.user_service import UserService
from core.services.workout_service import WorkoutService


def get_context(request: Request) -> AppContext:
    """Return the context attached to the application at startup."""
    return request.app.state.context


ContextDep = Annotated[AppContext, Depends(get_context)]


def get_database(context: ContextDep) -> Any:
    """Return the shared database handle."""
    return context.database


DatabaseDep = Annotated[Any, Depends(get_database)]


# =============================================================================
# Services
# =============================================================================

def get_user_service(database: DatabaseDep) -> UserService:
    return UserService(database)


def get_workout_service(database: DatabaseDep) -> WorkoutService:
    return WorkoutService(database)


def get_progress_service(database: DatabaseDep) -> ProgressService:
    return ProgressService(database)


def get_nutrition_service(database: DatabaseDep) -> NutritionService:
    return NutritionService(database)


def get_motivation_service(database: DatabaseDep) -> MotivationService:
    return MotivationService(database)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
WorkoutServiceDep = Annotated[WorkoutService, Depends(get_workout_service)]
ProgressServiceDep = Annotated[ProgressService, Depends(get_progress_service)]
NutritionServiceDep = Annotated[NutritionService, Depends(get_nutrition_service)]
MotivationServiceDep = Annotated[MotivationService, Depends(get_motivation_service)]
