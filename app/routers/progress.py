# =============================================================================
# app/routers/progress.py - Progress Tracking Endpoints
# =============================================================================
# Body measurements and the overall progress summary.
# Mounted at /api/progress. All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import CurrentUser
from app.body import parse_body
from app.dependencies import ProgressServiceDep
from core.models.progress import ProgressEntryCreate

router = APIRouter()


@router.post("", status_code=201)
async def create_entry(
    user: CurrentUser,
    progress: ProgressServiceDep,
    body: Annotated[ProgressEntryCreate, Depends(parse_body(ProgressEntryCreate))],
):
    """Log weight and optional body measurements."""
    entry = await progress.create_entry(user.id, body)
    return {"success": True, "entry": entry}


@router.get("")
async def list_entries(
    user: CurrentUser,
    progress: ProgressServiceDep,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum entries returned")] = 20,
):
    """List measurements, newest first."""
    entries = await progress.list_entries(user.id, limit=limit)
    return {"success": True, "count": len(entries), "entries": entries}


@router.get("/summary")
async def get_summary(user: CurrentUser, progress: ProgressServiceDep):
    """
    Progress summary.

    Weight change from the first to the latest entry, plus the number of
    completed workouts and total minutes trained.
    """
    summary = await progress.summary(user.id)
    return {"success": True, "summary": summary}


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: Annotated[str, Path(description="Progress entry id")],
    user: CurrentUser,
    progress: ProgressServiceDep,
):
    await progress.delete_entry(user.id, entry_id)
    return {"success": True, "message": "Progress entry deleted."}
