# =============================================================================
# app/routers/session.py - Workout Session Endpoints
# =============================================================================
# Plan, complete and review workout sessions, and fetch the adaptive
# intensity recommendation. Mounted at /api/session.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import CurrentUser
from app.body import parse_body
from app.dependencies import WorkoutServiceDep
from core.models.workout import WorkoutSessionComplete, WorkoutSessionCreate, WorkoutStatus

router = APIRouter()

SessionId = Annotated[str, Path(description="Workout session id")]


@router.post("", status_code=201)
async def create_session(
    user: CurrentUser,
    workouts: WorkoutServiceDep,
    body: Annotated[WorkoutSessionCreate, Depends(parse_body(WorkoutSessionCreate))],
):
    """
    Plan a new workout session.

    When `intensity` is omitted, the current recommendation is used.
    """
    session = await workouts.create_session(user, body)
    return {"success": True, "session": session}


@router.get("")
async def list_sessions(
    user: CurrentUser,
    workouts: WorkoutServiceDep,
    status: Annotated[WorkoutStatus | None, Query(description="Filter by status")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum sessions returned")] = 20,
):
    """List the user's sessions, newest first."""
    sessions = await workouts.list_sessions(user.id, status=status, limit=limit)
    return {"success": True, "count": len(sessions), "sessions": sessions}


@router.get("/recommendation")
async def get_recommendation(user: CurrentUser, workouts: WorkoutServiceDep):
    """
    Recommend the next session's intensity.

    Based on perceived exertion of the last three completed sessions.
    """
    recommendation = await workouts.recommend(user)
    return {"success": True, "recommendation": recommendation}


@router.get("/{session_id}")
async def get_session(session_id: SessionId, user: CurrentUser, workouts: WorkoutServiceDep):
    session = await workouts.get_session(user.id, session_id)
    return {"success": True, "session": session}


@router.post("/{session_id}/complete")
async def complete_session(
    session_id: SessionId,
    user: CurrentUser,
    workouts: WorkoutServiceDep,
    body: Annotated[WorkoutSessionComplete, Depends(parse_body(WorkoutSessionComplete))],
):
    """
    Mark a planned session as done.

    Raises:
        409: If the session was already completed
    """
    session = await workouts.complete_session(user.id, session_id, body)
    return {"success": True, "session": session}


@router.delete("/{session_id}")
async def delete_session(session_id: SessionId, user: CurrentUser, workouts: WorkoutServiceDep):
    await workouts.delete_session(user.id, session_id)
    return {"success": True, "message": "Workout session deleted."}
