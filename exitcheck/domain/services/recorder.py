"""Exit Event Recorder - the append-only log of departures."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from ..exceptions import PersistenceError
from ..models import ExitEvent

if TYPE_CHECKING:
    from ...infra.store import Store

logger = logging.getLogger(__name__)


class ExitEventRecorder:
    """Persists one ExitEvent per closed checklist session."""

    def __init__(self, store: Store) -> None:
        """Initialize the recorder.

        Args:
            store: Entity store for ExitEvent persistence.
        """
        self._store = store

    def record(
        self,
        timestamp: datetime,
        was_complete: bool,
        dismissed_early: bool = False,
        forgotten_items: list[str] | None = None,
    ) -> ExitEvent:
        """Create and persist an exit event.

        An event must never be dropped silently, so store failures are
        raised to the caller instead of being logged.

        Raises:
            PersistenceError: If the event could not be stored.
        """
        event = ExitEvent.create(
            timestamp=timestamp,
            was_complete=was_complete,
            dismissed_early=dismissed_early,
            forgotten_items=forgotten_items,
        )
        try:
            self._store.insert(event)
            self._store.save()
        except PersistenceError:
            self._discard(event)
            raise
        except Exception as e:
            self._discard(event)
            raise PersistenceError(f"Failed to record exit event: {e}") from e

        logger.info(
            f"Recorded exit {event.id[:8]}... complete={event.was_complete} "
            f"rushed={event.dismissed_early} forgotten={len(event.forgotten_items)}"
        )
        return event

    def _discard(self, event: ExitEvent) -> None:
        """Take a failed event back out of the store's pending changes."""
        try:
            self._store.delete(event)
        except Exception as e:
            logger.warning(f"Failed to discard unsaved exit {event.id[:8]}...: {e}")

    def history(self) -> list[ExitEvent]:
        """All events, newest first."""
        return self._store.fetch(ExitEvent, sort_key=lambda e: e.timestamp, reverse=True)

    def recent(self, limit: int = 10) -> list[ExitEvent]:
        return self.history()[:limit]

    def count(self) -> int:
        return len(self._store.fetch(ExitEvent))
