# =============================================================================
# core/models/motivation.py - Motivation Schemas
# =============================================================================

from pydantic import BaseModel, Field


class Quote(BaseModel):
    text: str
    author: str


class Streak(BaseModel):
    """
    Consecutive UTC days with at least one completed workout.

    `current` only counts while the streak is alive, i.e. the last workout
    was today or yesterday.
    """
    current: int = Field(default=0, ge=0)
    longest: int = Field(default=0, ge=0)
    last_workout_day: str | None = None
