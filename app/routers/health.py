# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Read-only, unauthenticated endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()

API_NAME = "Adaptive Fitness API"


# =============================================================================
# Response Models
# =============================================================================

class RootResponse(BaseModel):
    """API greeting with a pointer to the health check."""
    success: bool = True
    message: str
    documentation: str


class HealthResponse(BaseModel):
    """Basic health check response."""
    success: bool = True
    message: str
    timestamp: datetime


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_model=RootResponse)
async def root():
    """Root endpoint - returns API greeting."""
    return RootResponse(message=API_NAME, documentation="/api/health")


@router.get("/api/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns liveness status and the current server time (UTC).
    """
    return HealthResponse(
        message=f"{API_NAME} is running",
        timestamp=datetime.now(timezone.utc),
    )
