# =============================================================================
# app/context.py - Application Context
# =============================================================================
# The process-wide state handed to route handlers: settings plus the single
# long-lived database handle. Built once at startup and stored on
# `app.state.context`; handlers receive it through dependencies, never as a
# module global, so tests can substitute a fake database.
# =============================================================================

from dataclasses import dataclass
from typing import Any

from app.config import Settings


@dataclass(frozen=True)
class AppContext:
    """Settings and database shared by every request."""
    settings: Settings
    database: Any
