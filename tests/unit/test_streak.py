"""Unit tests for the streak tracker."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

import pytest

from exitcheck.domain.models import StreakState
from exitcheck.domain.services import StreakTracker, milestone_message_for
from exitcheck.domain.services.streak import CELEBRATION_MESSAGES
from exitcheck.infra import InMemoryStreakStateRepository

DAY_1 = datetime(2024, 1, 8, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def tracker(streak_repository) -> StreakTracker:
    return StreakTracker(streak_repository, rng=random.Random(7))


class TestRecordPerfectExit:
    """Tests for the streak update rule."""

    def test_first_perfect_exit(self, tracker):
        state = tracker.record_perfect_exit(DAY_1)

        assert state.current_streak == 1
        assert state.total_perfect_exits == 1
        assert state.last_perfect_exit_at == DAY_1

    def test_consecutive_days(self, tracker):
        for offset in range(3):
            tracker.record_perfect_exit(DAY_1 + timedelta(days=offset))

        assert tracker.current_streak == 3
        assert tracker.total_perfect_exits == 3

    def test_gap_resets_streak(self, tracker):
        tracker.record_perfect_exit(DAY_1)
        tracker.record_perfect_exit(DAY_1 + timedelta(days=1))
        tracker.record_perfect_exit(DAY_1 + timedelta(days=3))

        assert tracker.current_streak == 1
        assert tracker.total_perfect_exits == 3

    def test_same_day_keeps_streak(self, tracker):
        tracker.record_perfect_exit(DAY_1)
        tracker.record_perfect_exit(DAY_1 + timedelta(days=1))
        tracker.record_perfect_exit(DAY_1 + timedelta(days=1, hours=9))

        assert tracker.current_streak == 2
        assert tracker.total_perfect_exits == 3

    def test_day_boundary_not_hours(self, tracker):
        """Late evening then early next morning is a new day."""
        tracker.record_perfect_exit(datetime(2024, 1, 8, 23, 50, tzinfo=timezone.utc))
        tracker.record_perfect_exit(datetime(2024, 1, 9, 0, 10, tzinfo=timezone.utc))

        assert tracker.current_streak == 2

    def test_state_is_persisted(self, streak_repository):
        tracker = StreakTracker(streak_repository)
        tracker.record_perfect_exit(DAY_1)
        tracker.record_perfect_exit(DAY_1 + timedelta(days=1))

        reloaded = StreakTracker(streak_repository)

        assert reloaded.current_streak == 2
        assert reloaded.total_perfect_exits == 2

    def test_continues_from_loaded_state(self):
        repo = InMemoryStreakStateRepository(
            StreakState(
                current_streak=6,
                last_perfect_exit_at=DAY_1,
                total_perfect_exits=20,
            )
        )
        tracker = StreakTracker(repo)

        tracker.record_perfect_exit(DAY_1 + timedelta(days=1))

        assert tracker.current_streak == 7
        assert tracker.milestone_message() == "7-day perfect exit streak! 🔥"

    def test_state_copy_is_detached(self, tracker):
        tracker.record_perfect_exit(DAY_1)
        state = tracker.state
        state.current_streak = 99

        assert tracker.current_streak == 1

    def test_reset(self, tracker, streak_repository):
        tracker.record_perfect_exit(DAY_1)
        tracker.reset()

        assert tracker.current_streak == 0
        assert streak_repository.load() == StreakState()


class TestMessages:
    """Tests for milestone and celebration messages."""

    @pytest.mark.parametrize(
        ("streak", "expected"),
        [
            (0, None),
            (2, None),
            (3, "3-day streak! You're on a roll! ✨"),
            (4, "3-day streak! You're on a roll! ✨"),
            (5, "5 days strong! Keep it up! 💪"),
            (10, "7-day perfect exit streak! 🔥"),
            (14, "Two weeks of perfect exits! 🌟"),
            (45, "30-day legend! You're unstoppable! 👑"),
        ],
    )
    def test_milestone_message_for(self, streak, expected):
        assert milestone_message_for(streak) == expected

    def test_celebration_message_from_pool(self, tracker):
        assert tracker.celebration_message() in CELEBRATION_MESSAGES
