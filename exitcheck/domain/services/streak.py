"""Streak Tracker - consecutive days with a perfect exit.

A day counts when it holds at least one perfect exit. Rushed exits neither
extend nor break a streak; only a gap of more than one calendar day between
perfect exits resets it.
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import TYPE_CHECKING

from ..models import StreakState

if TYPE_CHECKING:
    from ...infra.streak_state import StreakStateRepository

logger = logging.getLogger(__name__)

# Highest threshold first
MILESTONE_MESSAGES: list[tuple[int, str]] = [
    (30, "30-day legend! You're unstoppable! 👑"),
    (14, "Two weeks of perfect exits! 🌟"),
    (7, "7-day perfect exit streak! 🔥"),
    (5, "5 days strong! Keep it up! 💪"),
    (3, "3-day streak! You're on a roll! ✨"),
]

CELEBRATION_MESSAGES: list[str] = [
    "No U-turns today! 🔥",
    "Smooth exit, champ! 😎",
    "You remembered everything! 🎉",
    "Future you says thanks! 🙌",
    "Adulting level: Expert 💯",
    "Keys? Check. Wallet? Check. You? Awesome! ✨",
    "Exit status: Flawless 💎",
]


def milestone_message_for(streak: int) -> str | None:
    """Message for the highest milestone reached by streak, if any."""
    for threshold, message in MILESTONE_MESSAGES:
        if streak >= threshold:
            return message
    return None


def _calendar_day(value: datetime, reference: datetime) -> date:
    """Calendar day of value, seen in the zone of reference."""
    if value.tzinfo is not None and reference.tzinfo is not None:
        return value.astimezone(reference.tzinfo).date()
    return value.date()


class StreakTracker:
    """Maintains the perfect-exit streak and persists it after each change."""

    def __init__(
        self,
        repository: StreakStateRepository,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the tracker.

        Args:
            repository: Where the streak state is loaded from and saved to.
            rng: Random source for celebration messages.
        """
        self._repo = repository
        self._state = repository.load()
        self._rng = rng or random.Random()

    @property
    def state(self) -> StreakState:
        return self._state.model_copy()

    @property
    def current_streak(self) -> int:
        return self._state.current_streak

    @property
    def total_perfect_exits(self) -> int:
        return self._state.total_perfect_exits

    def record_perfect_exit(self, now: datetime) -> StreakState:
        """Count a perfect exit made at `now`.

        Calendar days are taken from `now` as given, so callers pass a
        datetime in the user's local zone.
        """
        state = self._state.model_copy()
        today = now.date()

        if state.last_perfect_exit_at is None:
            state.current_streak = 1
        else:
            last_day = _calendar_day(state.last_perfect_exit_at, now)
            diff_days = (today - last_day).days
            if diff_days == 1:
                state.current_streak += 1
            elif diff_days > 1:
                state.current_streak = 1
            # Same day: a repeat exit does not count twice

        state.last_perfect_exit_at = now
        state.total_perfect_exits += 1

        self._repo.save(state)
        self._state = state
        logger.info(
            f"Perfect exit recorded: streak={state.current_streak} "
            f"total={state.total_perfect_exits}"
        )
        return state.model_copy()

    def milestone_message(self) -> str | None:
        return milestone_message_for(self._state.current_streak)

    def celebration_message(self) -> str:
        return self._rng.choice(CELEBRATION_MESSAGES)

    def reset(self) -> None:
        """Forget the streak (app data reset)."""
        self._state = StreakState()
        self._repo.save(self._state)
        logger.info("Streak state reset")
