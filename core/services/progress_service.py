# =============================================================================
# core/services/progress_service.py - Progress Tracking Business Logic
# =============================================================================

import logging
from typing import Any

from pymongo import ASCENDING, DESCENDING

from app.exceptions import ResourceNotFoundError
from core.models.progress import ProgressEntry, ProgressEntryCreate, ProgressSummary
from core.services.workout_service import WorkoutService
from lib.utils import parse_object_id, utc_now

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for body measurement entries."""

    def __init__(self, database: Any):
        self.collection = database.progress_entries
        self.workouts = WorkoutService(database)

    async def create_entry(self, user_id: str, request: ProgressEntryCreate) -> ProgressEntry:
        """Log a measurement; recorded_at defaults to now."""
        doc = {
            "user_id": user_id,
            "weight_kg": request.weight_kg,
            "body_fat_percent": request.body_fat_percent,
            "measurements": request.measurements,
            "note": request.note,
            "recorded_at": request.recorded_at or utc_now(),
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Logged progress entry {doc['_id']} for user: {user_id}")
        return ProgressEntry.from_document(doc)

    async def list_entries(self, user_id: str, limit: int = 20) -> list[ProgressEntry]:
        """List entries newest first."""
        cursor = self.collection.find(
            {"user_id": user_id},
            sort=[("recorded_at", DESCENDING)],
            limit=limit,
        )
        docs = await cursor.to_list(length=limit)
        return [ProgressEntry.from_document(doc) for doc in docs]

    async def delete_entry(self, user_id: str, entry_id: str) -> None:
        """
        Delete an entry.

        Raises:
            ResourceNotFoundError: If it doesn't exist or isn't the user's
        """
        oid = parse_object_id(entry_id)
        deleted = 0
        if oid is not None:
            result = await self.collection.delete_one({"_id": oid, "user_id": user_id})
            deleted = result.deleted_count
        if not deleted:
            raise ResourceNotFoundError("Progress entry", entry_id)
        logger.info(f"Deleted progress entry {entry_id} for user: {user_id}")

    async def _edge_entry(self, user_id: str, direction: int) -> dict[str, Any] | None:
        cursor = self.collection.find(
            {"user_id": user_id},
            sort=[("recorded_at", direction)],
            limit=1,
        )
        docs = await cursor.to_list(length=1)
        return docs[0] if docs else None

    async def summary(self, user_id: str) -> ProgressSummary:
        """
        Summarize weight change and training volume.

        Weight fields stay None until the first entry is logged.
        """
        entries = await self.collection.count_documents({"user_id": user_id})
        completed, minutes = await self.workouts.completion_totals(user_id)

        summary = ProgressSummary(
            entries=entries,
            completed_sessions=completed,
            total_workout_minutes=minutes,
        )
        if not entries:
            return summary

        first = await self._edge_entry(user_id, ASCENDING)
        latest = await self._edge_entry(user_id, DESCENDING)
        summary.starting_weight_kg = first["weight_kg"]
        summary.current_weight_kg = latest["weight_kg"]
        summary.weight_change_kg = round(latest["weight_kg"] - first["weight_kg"], 2)
        return summary
