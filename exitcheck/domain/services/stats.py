"""Exit statistics - quick numbers for the stats screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import ChecklistItem, ExitEvent, ExitStats, ForgottenItemCount

if TYPE_CHECKING:
    from ...infra.store import Store


class ExitStatsService:
    """Summarizes the exit history and item counters."""

    def __init__(self, store: Store, most_forgotten_limit: int = 5) -> None:
        self._store = store
        self._most_forgotten_limit = most_forgotten_limit

    def summarize(self) -> ExitStats:
        events = self._store.fetch(ExitEvent)
        total = len(events)
        perfect = sum(1 for e in events if e.is_perfect)
        rushed = sum(1 for e in events if e.dismissed_early)

        return ExitStats(
            total_exits=total,
            perfect_exits=perfect,
            rushed_exits=rushed,
            success_rate=(perfect / total * 100) if total else 0.0,
            most_forgotten=self.most_forgotten(),
        )

    def most_forgotten(self) -> list[ForgottenItemCount]:
        items = self._store.fetch(
            ChecklistItem,
            predicate=lambda i: i.forgotten_count > 0,
            sort_key=lambda i: i.forgotten_count,
            reverse=True,
        )
        return [
            ForgottenItemCount(title=i.title, forgotten_count=i.forgotten_count)
            for i in items[: self._most_forgotten_limit]
        ]
