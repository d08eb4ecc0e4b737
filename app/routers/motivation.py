# =============================================================================
# app/routers/motivation.py - Motivation Endpoints
# =============================================================================
# Mounted at /api/motivation. All endpoints require authentication.
# =============================================================================

from fastapi import APIRouter

from app.auth import CurrentUser
from app.dependencies import MotivationServiceDep

router = APIRouter()


@router.get("/quote")
async def get_quote(user: CurrentUser, motivation: MotivationServiceDep):
    """A random motivational quote."""
    return {"success": True, "quote": motivation.random_quote()}


@router.get("/streak")
async def get_streak(user: CurrentUser, motivation: MotivationServiceDep):
    """Current and longest runs of consecutive workout days."""
    return {"success": True, "streak": await motivation.streak(user.id)}


@router.get("/message")
async def get_message(user: CurrentUser, motivation: MotivationServiceDep):
    """Encouragement tailored to the current streak."""
    message, streak = await motivation.message(user)
    return {"success": True, "message": message, "streak": streak}
