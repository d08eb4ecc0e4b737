# =============================================================================
# core/models/workout.py - Workout Session Schemas
# =============================================================================
# A workout session is planned first and completed later, at which point
# the user reports duration and perceived exertion (RPE, 1-10). Completed
# sessions feed the adaptive intensity recommendation.
#
# Flow: planned -> completed
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lib.utils import ensure_utc


class WorkoutType(str, Enum):
    """Kind of training in a session."""
    STRENGTH = "strength"
    CARDIO = "cardio"
    HIIT = "hiit"
    FLEXIBILITY = "flexibility"
    MIXED = "mixed"


class WorkoutStatus(str, Enum):
    """
    Possible states for a workout session.

    - planned: Created, not yet done
    - completed: Done, with duration and exertion recorded
    """
    PLANNED = "planned"
    COMPLETED = "completed"


class IntensityAdjustment(str, Enum):
    """Direction of the next recommended intensity."""
    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


class Exercise(BaseModel):
    """One exercise inside a session."""
    name: str = Field(..., min_length=1, max_length=100)
    sets: int = Field(default=1, ge=1, le=50)
    reps: int = Field(default=0, ge=0, le=1000)
    weight_kg: float | None = Field(default=None, ge=0, le=1000)
    duration_minutes: float | None = Field(default=None, ge=0, le=600)


class WorkoutSessionCreate(BaseModel):
    """
    Schema for planning a session.

    When intensity is omitted the current recommendation is used.

    Example:
        {
            "workout_type": "strength",
            "exercises": [{"name": "Squat", "sets": 5, "reps": 5, "weight_kg": 80}]
        }
    """
    workout_type: WorkoutType
    exercises: list[Exercise] = Field(default_factory=list, max_length=50)
    intensity: int | None = Field(default=None, ge=1, le=10)
    planned_at: datetime | None = None
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("planned_at")
    @classmethod
    def to_utc(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v)


class WorkoutSessionComplete(BaseModel):
    """What the user reports after finishing a session."""
    duration_minutes: int = Field(..., ge=1, le=600)
    perceived_exertion: int = Field(..., ge=1, le=10)
    notes: str | None = Field(default=None, max_length=1000)


class WorkoutSession(BaseModel):
    """Schema for returning a session to clients."""
    id: str
    workout_type: WorkoutType
    exercises: list[Exercise]
    intensity: int
    status: WorkoutStatus
    planned_at: datetime
    completed_at: datetime | None = None
    duration_minutes: int | None = None
    perceived_exertion: int | None = None
    notes: str | None = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "WorkoutSession":
        return cls(
            id=str(doc["_id"]),
            workout_type=doc["workout_type"],
            exercises=doc.get("exercises", []),
            intensity=doc["intensity"],
            status=doc["status"],
            planned_at=ensure_utc(doc["planned_at"]),
            completed_at=ensure_utc(doc.get("completed_at")),
            duration_minutes=doc.get("duration_minutes"),
            perceived_exertion=doc.get("perceived_exertion"),
            notes=doc.get("notes"),
        )


class WorkoutRecommendation(BaseModel):
    """Suggested intensity for the next session."""
    intensity: int = Field(..., ge=1, le=10)
    adjustment: IntensityAdjustment
    reason: str
    based_on: int = Field(..., ge=0, description="Completed sessions considered")
