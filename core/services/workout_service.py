# =============================================================================
# core/services/workout_service.py - Workout Session Business Logic
# =============================================================================
# Plans, completes and lists workout sessions, and derives the adaptive
# intensity recommendation from recent perceived exertion.
# =============================================================================

import logging
from statistics import mean
from typing import Any

from pymongo import DESCENDING

from app.exceptions import ConflictError, ResourceNotFoundError
from core.models.user import FitnessLevel, UserProfile
from core.models.workout import (
    IntensityAdjustment,
    WorkoutRecommendation,
    WorkoutSession,
    WorkoutSessionComplete,
    WorkoutSessionCreate,
    WorkoutStatus,
)
from lib.utils import day_key, parse_object_id, utc_now

logger = logging.getLogger(__name__)

BASE_INTENSITY = {
    FitnessLevel.BEGINNER: 4,
    FitnessLevel.INTERMEDIATE: 6,
    FitnessLevel.ADVANCED: 8,
}

# Sessions averaged for the recommendation
RECENT_WINDOW = 3

# Average RPE above HIGH backs off, below LOW pushes harder
HIGH_EXERTION = 8
LOW_EXERTION = 5

MIN_INTENSITY = 1
MAX_INTENSITY = 10


def recommend_intensity(
    fitness_level: FitnessLevel,
    recent: list[dict[str, Any]],
) -> WorkoutRecommendation:
    """
    Recommend the next session's intensity.

    Args:
        fitness_level: The user's fitness level (used when there's no history)
        recent: Completed session documents, newest first

    Returns:
        WorkoutRecommendation with the clamped intensity and direction
    """
    if not recent:
        return WorkoutRecommendation(
            intensity=BASE_INTENSITY[fitness_level],
            adjustment=IntensityAdjustment.MAINTAIN,
            reason=f"No completed sessions yet; starting at the {fitness_level.value} level.",
            based_on=0,
        )

    window = recent[:RECENT_WINDOW]
    current = window[0]["intensity"]
    average = mean(doc["perceived_exertion"] for doc in window)

    if average > HIGH_EXERTION:
        target = current - 1
        reason = f"Average exertion {average:.1f} is high; easing off."
    elif average < LOW_EXERTION:
        target = current + 1
        reason = f"Average exertion {average:.1f} is low; pushing harder."
    else:
        target = current
        reason = f"Average exertion {average:.1f} is on target."

    target = max(MIN_INTENSITY, min(MAX_INTENSITY, target))
    if target > current:
        adjustment = IntensityAdjustment.INCREASE
    elif target < current:
        adjustment = IntensityAdjustment.DECREASE
    else:
        adjustment = IntensityAdjustment.MAINTAIN

    return WorkoutRecommendation(
        intensity=target,
        adjustment=adjustment,
        reason=reason,
        based_on=len(window),
    )


class WorkoutService:
    """
    Service for workout session operations.

    Every query is scoped to the owning user; another user's session is
    reported as not found.
    """

    def __init__(self, database: Any):
        self.collection = database.workout_sessions

    async def _get_document(self, user_id: str, session_id: str) -> dict[str, Any]:
        oid = parse_object_id(session_id)
        doc = None
        if oid is not None:
            doc = await self.collection.find_one({"_id": oid, "user_id": user_id})
        if doc is None:
            raise ResourceNotFoundError("Workout session", session_id)
        return doc

    async def create_session(
        self,
        user: UserProfile,
        request: WorkoutSessionCreate,
    ) -> WorkoutSession:
        """Plan a session; intensity defaults to the current recommendation."""
        intensity = request.intensity
        if intensity is None:
            intensity = (await self.recommend(user)).intensity

        doc = {
            "user_id": user.id,
            "workout_type": request.workout_type.value,
            "exercises": [exercise.model_dump() for exercise in request.exercises],
            "intensity": intensity,
            "status": WorkoutStatus.PLANNED.value,
            "planned_at": request.planned_at or utc_now(),
            "completed_at": None,
            "duration_minutes": None,
            "perceived_exertion": None,
            "notes": request.notes,
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Planned {doc['workout_type']} session {doc['_id']} for user: {user.id}")
        return WorkoutSession.from_document(doc)

    async def list_sessions(
        self,
        user_id: str,
        status: WorkoutStatus | None = None,
        limit: int = 20,
    ) -> list[WorkoutSession]:
        """List sessions newest first."""
        query: dict[str, Any] = {"user_id": user_id}
        if status is not None:
            query["status"] = status.value

        cursor = self.collection.find(query, sort=[("planned_at", DESCENDING)], limit=limit)
        docs = await cursor.to_list(length=limit)
        return [WorkoutSession.from_document(doc) for doc in docs]

    async def get_session(self, user_id: str, session_id: str) -> WorkoutSession:
        """
        Get one session.

        Raises:
            ResourceNotFoundError: If it doesn't exist or isn't the user's
        """
        return WorkoutSession.from_document(await self._get_document(user_id, session_id))

    async def complete_session(
        self,
        user_id: str,
        session_id: str,
        request: WorkoutSessionComplete,
    ) -> WorkoutSession:
        """
        Record the outcome of a planned session.

        Raises:
            ResourceNotFoundError: If it doesn't exist or isn't the user's
            ConflictError: If it was already completed
        """
        doc = await self._get_document(user_id, session_id)
        if doc["status"] == WorkoutStatus.COMPLETED.value:
            raise ConflictError("Workout session is already completed.")

        completed_at = utc_now()
        changes = {
            "status": WorkoutStatus.COMPLETED.value,
            "completed_at": completed_at,
            "completed_day": day_key(completed_at),
            "duration_minutes": request.duration_minutes,
            "perceived_exertion": request.perceived_exertion,
        }
        if request.notes is not None:
            changes["notes"] = request.notes

        await self.collection.update_one({"_id": doc["_id"]}, {"$set": changes})
        doc.update(changes)

        logger.info(
            f"Completed session {session_id} for user {user_id} "
            f"(rpe={request.perceived_exertion}, {request.duration_minutes} min)"
        )
        return WorkoutSession.from_document(doc)

    async def delete_session(self, user_id: str, session_id: str) -> None:
        """
        Delete a session.

        Raises:
            ResourceNotFoundError: If it doesn't exist or isn't the user's
        """
        doc = await self._get_document(user_id, session_id)
        await self.collection.delete_one({"_id": doc["_id"]})
        logger.info(f"Deleted session {session_id} for user: {user_id}")

    async def recommend(self, user: UserProfile) -> WorkoutRecommendation:
        """Recommend the next intensity from the most recent completed sessions."""
        cursor = self.collection.find(
            {"user_id": user.id, "status": WorkoutStatus.COMPLETED.value},
            sort=[("completed_at", DESCENDING)],
            limit=RECENT_WINDOW,
        )
        recent = await cursor.to_list(length=RECENT_WINDOW)
        return recommend_intensity(user.fitness_level, recent)

    async def completed_days(self, user_id: str) -> list[str]:
        """Distinct UTC days (YYYY-MM-DD) with at least one completed session."""
        cursor = self.collection.find(
            {"user_id": user_id, "status": WorkoutStatus.COMPLETED.value},
            projection={"completed_day": True},
        )
        docs = await cursor.to_list(length=None)
        return sorted({doc["completed_day"] for doc in docs if doc.get("completed_day")})

    async def completion_totals(self, user_id: str) -> tuple[int, int]:
        """Number of completed sessions and total minutes trained."""
        cursor = self.collection.find(
            {"user_id": user_id, "status": WorkoutStatus.COMPLETED.value},
            projection={"duration_minutes": True},
        )
        docs = await cursor.to_list(length=None)
        return len(docs), sum(doc.get("duration_minutes") or 0 for doc in docs)
