# =============================================================================
# core/services/motivation_service.py - Motivation Business Logic
# =============================================================================
# Quotes, workout streaks and streak-aware encouragement.
# =============================================================================

import random
from datetime import date, timedelta
from typing import Any

from core.models.motivation import Quote, Streak
from core.models.user import UserProfile
from core.services.workout_service import WorkoutService
from lib.utils import utc_now

QUOTES: tuple[Quote, ...] = (
    Quote(text="The only bad workout is the one that didn't happen.", author="Unknown"),
    Quote(text="Take care of your body. It's the only place you have to live.", author="Jim Rohn"),
    Quote(text="Strength does not come from physical capacity. It comes from an indomitable will.", author="Mahatma Gandhi"),
    Quote(text="It never gets easier, you just get better.", author="Unknown"),
    Quote(text="Motivation is what gets you started. Habit is what keeps you going.", author="Jim Ryun"),
    Quote(text="Success is the sum of small efforts, repeated day in and day out.", author="Robert Collier"),
    Quote(text="The body achieves what the mind believes.", author="Napoleon Hill"),
    Quote(text="Energy and persistence conquer all things.", author="Benjamin Franklin"),
)


def compute_streak(days: list[str], today: date) -> Streak:
    """
    Compute current and longest runs of consecutive workout days.

    Args:
        days: YYYY-MM-DD strings, any order, duplicates allowed
        today: The reference day (UTC)
    """
    unique = sorted({date.fromisoformat(day) for day in days})
    if not unique:
        return Streak()

    longest = run = 1
    for previous, current in zip(unique, unique[1:]):
        run = run + 1 if current - previous == timedelta(days=1) else 1
        longest = max(longest, run)

    last = unique[-1]
    alive = (today - last) <= timedelta(days=1)

    return Streak(
        current=run if alive else 0,
        longest=longest,
        last_workout_day=last.isoformat(),
    )


def streak_message(name: str, streak: Streak) -> str:
    """Encouragement for the current streak length."""
    if streak.current == 0:
        if streak.longest:
            return f"Welcome back, {name}! Your best streak was {streak.longest} days. Start a new one today."
        return f"Hi {name}, every journey starts with one session. Plan your first workout today!"
    if streak.current < 3:
        return f"Nice start, {name}! {streak.current} day streak. Keep the momentum going."
    if streak.current < 7:
        return f"You're on fire, {name}! {streak.current} days in a row. Consistency is paying off."
    return f"Incredible, {name}! {streak.current} straight days. You're building a real habit."


class MotivationService:
    """Service for quotes and streak-based encouragement."""

    def __init__(self, database: Any, rng: random.Random | None = None):
        self.workouts = WorkoutService(database)
        self.rng = rng or random.Random()

    def random_quote(self) -> Quote:
        return self.rng.choice(QUOTES)

    async def streak(self, user_id: str, today: date | None = None) -> Streak:
        days = await self.workouts.completed_days(user_id)
        return compute_streak(days, today or utc_now().date())

    async def message(self, user: UserProfile) -> tuple[str, Streak]:
        streak = await self.streak(user.id)
        return streak_message(user.name, streak), streak
