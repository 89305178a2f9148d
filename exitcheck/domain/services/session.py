"""Exit Session Orchestrator - from 'exit detected' to a recorded outcome.

The orchestrator owns at most one in-flight ExitSession. A session holds the
active items and their check flags in memory only; nothing is persisted
until it is closed with complete() or rush(). Closing order:

1. Persist the ExitEvent (failures propagate and leave the session open)
2. Rushed: mark unchecked items forgotten (failures are logged)
3. Perfect: update the streak
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from ..exceptions import ItemNotFoundError, NoActiveSessionError, SessionClosedError
from ..models import ChecklistItem, ExitDetected, SessionOutcome

if TYPE_CHECKING:
    from ...infra.capabilities import NotificationService
    from ...infra.store import Store
    from .recorder import ExitEventRecorder
    from .streak import StreakTracker

logger = logging.getLogger(__name__)

SessionListener = Callable[["ExitSession"], None]


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class ExitSession:
    """In-memory checklist state for one departure."""

    items: list[ChecklistItem]
    opened_at: datetime
    checked: dict[str, bool] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    closed: bool = False

    def _require_item(self, item_id: str) -> None:
        if item_id not in self.checked:
            raise ItemNotFoundError(item_id)

    def is_checked(self, item_id: str) -> bool:
        self._require_item(item_id)
        return self.checked[item_id]

    def set_checked(self, item_id: str, checked: bool = True) -> None:
        self._require_item(item_id)
        self.checked[item_id] = checked

    def toggle(self, item_id: str) -> bool:
        """Flip an item's check flag and return the new value."""
        self._require_item(item_id)
        self.checked[item_id] = not self.checked[item_id]
        return self.checked[item_id]

    @property
    def all_checked(self) -> bool:
        return all(self.checked.get(item.id, False) for item in self.items)

    @property
    def unchecked_items(self) -> list[ChecklistItem]:
        return [item for item in self.items if not self.checked.get(item.id, False)]

    @property
    def unchecked_count(self) -> int:
        return len(self.unchecked_items)


class ExitSessionOrchestrator:
    """Coordinates a checklist session with recording and streak updates."""

    def __init__(
        self,
        store: Store,
        recorder: ExitEventRecorder,
        streak_tracker: StreakTracker,
        notifications: NotificationService,
        is_foreground: Callable[[], bool] = lambda: False,
        auto_check_phone: bool = True,
        ask_for_feedback: bool = True,
        feedback_after_exits: int = 5,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            store: Entity store for checklist items.
            recorder: Persists the session outcome.
            streak_tracker: Updated on perfect exits.
            notifications: Schedules the exit prompt when backgrounded.
            is_foreground: Whether the host UI is currently visible.
            auto_check_phone: Pre-check items with "phone" in the title.
            ask_for_feedback: Whether feedback prompts are enabled.
            feedback_after_exits: Ask for feedback every N recorded exits.
            clock: Source of the current local time.
        """
        self._store = store
        self._recorder = recorder
        self._streak = streak_tracker
        self._notifications = notifications
        self._is_foreground = is_foreground
        self._auto_check_phone = auto_check_phone
        self._ask_for_feedback = ask_for_feedback
        self._feedback_after_exits = feedback_after_exits
        self._clock = clock

        self._session: ExitSession | None = None
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> ExitSession | None:
        """The in-flight session, if any."""
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a session-opened listener (the UI layer)."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Opening
    # =========================================================================

    def handle_exit(self, event: ExitDetected) -> ExitSession | None:
        """React to an exit detected by the geofence monitor.

        Foreground: open the session and tell the UI directly.
        Background: schedule the local prompt; the session opens when the
        user responds to it.
        """
        if self._is_foreground():
            logger.info(f"Exit at {event.detected_at.isoformat()}, host in foreground")
            return self.open_session()

        self._notifications.schedule_exit_prompt()
        logger.info("Exit prompt scheduled")
        return None

    def open_session(self) -> ExitSession:
        """Open a session, or return the one already in flight."""
        if self._session is not None:
            return self._session

        items = self._store.fetch(
            ChecklistItem,
            predicate=lambda i: i.is_active,
            sort_key=lambda i: i.order,
        )
        checked = {
            item.id: self._auto_check_phone and "phone" in item.title.lower()
            for item in items
        }
        session = ExitSession(items=items, opened_at=self._clock(), checked=checked)
        self._session = session
        logger.info(f"Opened exit session {session.id[:8]}... with {len(items)} items")

        for listener in list(self._listeners):
            listener(session)
        return session

    # =========================================================================
    # Closing
    # =========================================================================

    def _open_session_or_raise(self, session: ExitSession | None) -> ExitSession:
        session = session or self._session
        if session is None:
            raise NoActiveSessionError()
        if session.closed:
            raise SessionClosedError(session.id)
        return session

    def _close(self, session: ExitSession) -> None:
        session.closed = True
        if self._session is session:
            self._session = None

    def complete(self, session: ExitSession | None = None) -> SessionOutcome:
        """Close via the 'all good' path.

        The exit is perfect only if every item is checked. Otherwise the
        event lists the unchecked titles but counters and streak stay as
        they are.
        """
        session = self._open_session_or_raise(session)
        now = self._clock()
        perfect = session.all_checked
        forgotten = [] if perfect else [i.title for i in session.unchecked_items]

        event = self._recorder.record(
            timestamp=now,
            was_complete=perfect,
            dismissed_early=False,
            forgotten_items=forgotten,
        )
        self._close(session)

        if perfect:
            streak = self._streak.record_perfect_exit(now)
            return SessionOutcome(
                event=event,
                streak=streak,
                milestone_message=self._streak.milestone_message(),
                celebration_message=self._streak.celebration_message(),
                ask_for_feedback=self.should_ask_for_feedback(),
            )

        return SessionOutcome(
            event=event,
            streak=self._streak.state,
            ask_for_feedback=self.should_ask_for_feedback(),
        )

    def rush(self, session: ExitSession | None = None) -> SessionOutcome:
        """Close via the 'I'm rushing' path."""
        session = self._open_session_or_raise(session)
        now = self._clock()
        unchecked = session.unchecked_items

        event = self._recorder.record(
            timestamp=now,
            was_complete=False,
            dismissed_early=True,
            forgotten_items=[i.title for i in unchecked],
        )
        self._close(session)

        if unchecked:
            self._mark_forgotten(unchecked, now)

        return SessionOutcome(
            event=event,
            streak=self._streak.state,
            ask_for_feedback=self.should_ask_for_feedback(),
        )

    def _mark_forgotten(self, items: list[ChecklistItem], now: datetime) -> None:
        for item in items:
            item.mark_forgotten(now)
        try:
            self._store.save()
        except Exception as e:
            logger.warning(f"Failed to save forgotten counts for {len(items)} items: {e}")

    # =========================================================================
    # Feedback Gating
    # =========================================================================

    def should_ask_for_feedback(self) -> bool:
        """True every feedback_after_exits recorded exits."""
        if not self._ask_for_feedback or self._feedback_after_exits <= 0:
            return False
        total = self._recorder.count()
        return total > 0 and total % self._feedback_after_exits == 0
