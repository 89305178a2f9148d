"""Pattern Analyzer - learns which items get forgotten, and when.

For every checklist item this module:
1. Collects the exit events whose forgotten titles include the item
2. Finds the most common weekdays and times of day for those events
3. Suggests moving the item up, or highlighting it, when the signal is strong

Matching is by title: renaming an item leaves its history behind.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from ..models import ChecklistItem, ExitEvent, ExitPatternAnalysis

if TYPE_CHECKING:
    from ...infra.store import Store

logger = logging.getLogger(__name__)

HIGHLIGHT_THRESHOLD = 5


class PatternAnalyzer:
    """Computes per-item forgetfulness patterns from the exit history."""

    def __init__(
        self,
        store: Store | None = None,
        min_occurrences: int = 2,
        weekend_days: tuple[int, ...] = (6, 7),
    ) -> None:
        """Initialize the analyzer.

        Args:
            store: Entity store, needed only by top_suggestions().
            min_occurrences: Items forgotten fewer times are skipped.
            weekend_days: ISO weekdays treated as weekend.
        """
        self._store = store
        self._min_occurrences = max(2, min_occurrences)
        self._weekend_days = weekend_days

    def analyze(
        self,
        events: list[ExitEvent],
        items: list[ChecklistItem],
    ) -> list[ExitPatternAnalysis]:
        """Analyze the full history against the current items.

        Returns:
            One analysis per item forgotten at least min_occurrences times,
            most forgotten first.
        """
        patterns: list[ExitPatternAnalysis] = []

        for item in items:
            forgotten = [e for e in events if item.title in e.forgotten_items]
            if len(forgotten) < self._min_occurrences:
                continue

            day_counts = Counter(e.day_of_week for e in forgotten)
            time_counts = Counter(e.time_of_day for e in forgotten)

            patterns.append(
                ExitPatternAnalysis(
                    item_title=item.title,
                    forgotten_count=len(forgotten),
                    common_days=[day for day, _ in day_counts.most_common(2)],
                    common_times=[t for t, _ in time_counts.most_common(2)],
                    suggestion=self._suggest(item.title, forgotten),
                )
            )

        patterns.sort(key=lambda p: p.forgotten_count, reverse=True)
        logger.debug(f"Pattern analysis: {len(patterns)} of {len(items)} items flagged")
        return patterns

    def _suggest(self, title: str, forgotten: list[ExitEvent]) -> str | None:
        weekday = sum(1 for e in forgotten if e.is_weekday(self._weekend_days))
        weekend = len(forgotten) - weekday

        if weekday > weekend * 2:
            return f"You often forget {title} on weekdays. Consider moving it to the top!"
        if len(forgotten) >= HIGHLIGHT_THRESHOLD:
            return f"{title} is frequently forgotten. Want to highlight it?"
        return None

    def top_suggestions(self, limit: int = 3) -> list[ExitPatternAnalysis]:
        """Analyze the stored history and return the leading patterns."""
        if self._store is None:
            raise RuntimeError("PatternAnalyzer needs a store for top_suggestions()")
        events = self._store.fetch(ExitEvent)
        items = self._store.fetch(ChecklistItem, sort_key=lambda i: i.order)
        return self.analyze(events, items)[:limit]
