# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Greeting and health check endpoints
# - session.py: Workout sessions and intensity recommendations
# - progress.py: Body measurements and progress summary
# - nutrition.py: Meal logging and daily totals
# - motivation.py: Quotes, streaks and encouragement
#
# Authentication routes live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import session
from . import progress
from . import nutrition
from . import motivation

__all__ = [
    "health",
    "session",
    "progress",
    "nutrition",
    "motivation",
]
