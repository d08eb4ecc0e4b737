# =============================================================================
# core/models/progress.py - Progress Tracking Schemas
# =============================================================================
# Body measurements logged over time, plus the summary built from them.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lib.utils import ensure_utc


class ProgressEntryCreate(BaseModel):
    """
    Schema for logging a measurement.

    Example:
        {"weight_kg": 81.4, "body_fat_percent": 18.5, "measurements": {"waist": 84}}
    """
    weight_kg: float = Field(..., gt=0, le=500)
    body_fat_percent: float | None = Field(default=None, ge=0, le=100)
    measurements: dict[str, float] = Field(
        default_factory=dict,
        description="Circumferences in cm, keyed by body part"
    )
    note: str | None = Field(default=None, max_length=500)
    recorded_at: datetime | None = None

    @field_validator("recorded_at")
    @classmethod
    def to_utc(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v)

    @field_validator("measurements")
    @classmethod
    def positive_measurements(cls, v: dict[str, float]) -> dict[str, float]:
        for name, value in v.items():
            if value <= 0:
                raise ValueError(f"Measurement '{name}' must be positive")
        return v


class ProgressEntry(BaseModel):
    """Schema for returning a logged measurement."""
    id: str
    weight_kg: float
    body_fat_percent: float | None = None
    measurements: dict[str, float] = Field(default_factory=dict)
    note: str | None = None
    recorded_at: datetime

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "ProgressEntry":
        return cls(
            id=str(doc["_id"]),
            weight_kg=doc["weight_kg"],
            body_fat_percent=doc.get("body_fat_percent"),
            measurements=doc.get("measurements", {}),
            note=doc.get("note"),
            recorded_at=ensure_utc(doc["recorded_at"]),
        )


class ProgressSummary(BaseModel):
    """Overall progress across measurements and completed workouts."""
    entries: int = 0
    starting_weight_kg: float | None = None
    current_weight_kg: float | None = None
    weight_change_kg: float | None = None
    completed_sessions: int = 0
    total_workout_minutes: int = 0
