# =============================================================================
# tests/test_motivation.py - Motivation Tests
# =============================================================================

from datetime import date

import pytest

from core.models.motivation import Streak
from core.services.motivation_service import QUOTES, compute_streak, streak_message
from tests.test_sessions import plan_and_complete

TODAY = date(2026, 3, 10)


class TestComputeStreak:
    """Tests for the streak calculation."""

    def test_no_workouts(self):
        assert compute_streak([], TODAY) == Streak()

    def test_current_streak_ending_today(self):
        streak = compute_streak(["2026-03-08", "2026-03-09", "2026-03-10"], TODAY)

        assert streak.current == 3
        assert streak.longest == 3
        assert streak.last_workout_day == "2026-03-10"

    def test_streak_alive_through_yesterday(self):
        streak = compute_streak(["2026-03-08", "2026-03-09"], TODAY)

        assert streak.current == 2

    def test_broken_streak(self):
        """Test that a gap of two days resets the current streak."""
        streak = compute_streak(["2026-03-01", "2026-03-02", "2026-03-03", "2026-03-07"], TODAY)

        assert streak.current == 0
        assert streak.longest == 3
        assert streak.last_workout_day == "2026-03-07"

    def test_duplicates_and_order_ignored(self):
        streak = compute_streak(["2026-03-10", "2026-03-09", "2026-03-10"], TODAY)

        assert streak.current == 2


class TestStreakMessage:
    """Tests for streak-bucketed messages."""

    @pytest.mark.parametrize("current,fragment", [
        (1, "Nice start"),
        (4, "on fire"),
        (10, "Incredible"),
    ])
    def test_buckets(self, current, fragment):
        message = streak_message("Alex", Streak(current=current, longest=current))

        assert fragment in message
        assert "Alex" in message

    def test_no_history(self):
        assert "first workout" in streak_message("Alex", Streak())

    def test_lapsed(self):
        assert "best streak was 5 days" in streak_message("Alex", Streak(current=0, longest=5))


class TestMotivationEndpoints:
    """Tests for /api/motivation routes."""

    def test_quote(self, client, auth_headers):
        body = client.get("/api/motivation/quote", headers=auth_headers).json()

        assert body["success"] is True
        assert (body["quote"]["text"], body["quote"]["author"]) in {(q.text, q.author) for q in QUOTES}

    def test_requires_auth(self, client):
        assert client.get("/api/motivation/quote").status_code == 401

    def test_streak_after_workout(self, client, auth_headers):
        plan_and_complete(client, auth_headers, rpe=6)

        streak = client.get("/api/motivation/streak", headers=auth_headers).json()["streak"]

        assert streak["current"] == 1
        assert streak["longest"] == 1

    def test_message(self, client, auth_headers):
        body = client.get("/api/motivation/message", headers=auth_headers).json()

        assert body["success"] is True
        assert "Alex" in body["message"]
        assert body["streak"]["current"] == 0
