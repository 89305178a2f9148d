"""Unit tests for the pattern analyzer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from exitcheck.domain.models import ChecklistItem, ExitEvent, TimeOfDay
from exitcheck.domain.services import PatternAnalyzer

# Monday 2024-01-08
MONDAY = datetime(2024, 1, 8, 8, 0, tzinfo=timezone.utc)


def forgot(title: str, day_offset: int, hour: int = 8) -> ExitEvent:
    ts = (MONDAY + timedelta(days=day_offset)).replace(hour=hour)
    return ExitEvent.create(
        ts, was_complete=False, dismissed_early=True, forgotten_items=[title]
    )


@pytest.fixture
def analyzer() -> PatternAnalyzer:
    return PatternAnalyzer()


@pytest.fixture
def wallet() -> ChecklistItem:
    return ChecklistItem(title="Wallet", order=1)


class TestAnalyze:
    """Tests for PatternAnalyzer.analyze()."""

    def test_single_occurrence_is_skipped(self, analyzer, wallet):
        assert analyzer.analyze([forgot("Wallet", 0)], [wallet]) == []

    def test_weekday_pattern_suggests_reorder(self, analyzer, wallet):
        # Monday, Tuesday, Wednesday mornings
        events = [forgot("Wallet", offset) for offset in range(3)]

        [pattern] = analyzer.analyze(events, [wallet])

        assert pattern.item_title == "Wallet"
        assert pattern.forgotten_count == 3
        assert len(pattern.common_days) == 2
        assert set(pattern.common_days) <= {1, 2, 3}
        assert pattern.common_times == [TimeOfDay.MORNING]
        assert pattern.suggestion == (
            "You often forget Wallet on weekdays. Consider moving it to the top!"
        )

    def test_balanced_pattern_has_no_suggestion(self, analyzer, wallet):
        # Two weekdays, two weekend days
        events = [forgot("Wallet", offset) for offset in (0, 1, 5, 6)]

        [pattern] = analyzer.analyze(events, [wallet])

        assert pattern.forgotten_count == 4
        assert pattern.suggestion is None

    def test_frequent_pattern_suggests_highlight(self, analyzer, wallet):
        # 2 weekday + 3 weekend: not weekday-dominated, but 5 in total
        events = [forgot("Wallet", offset) for offset in (0, 1, 5, 6, 12)]

        [pattern] = analyzer.analyze(events, [wallet])

        assert pattern.suggestion == (
            "Wallet is frequently forgotten. Want to highlight it?"
        )

    def test_most_common_day_first(self, analyzer, wallet):
        # Mondays twice, one Thursday
        events = [forgot("Wallet", 0), forgot("Wallet", 7), forgot("Wallet", 3)]

        [pattern] = analyzer.analyze(events, [wallet])

        assert pattern.common_days[0] == 1

    def test_common_times(self, analyzer, wallet):
        events = [
            forgot("Wallet", 0, hour=18),
            forgot("Wallet", 1, hour=19),
            forgot("Wallet", 2, hour=9),
        ]

        [pattern] = analyzer.analyze(events, [wallet])

        assert pattern.common_times == [TimeOfDay.EVENING, TimeOfDay.MORNING]

    def test_sorted_by_count(self, analyzer, wallet):
        keys = ChecklistItem(title="Keys", order=0)
        events = [forgot("Keys", 0), forgot("Keys", 1)] + [
            forgot("Wallet", offset) for offset in range(3)
        ]

        patterns = analyzer.analyze(events, [keys, wallet])

        assert [p.item_title for p in patterns] == ["Wallet", "Keys"]

    def test_matching_is_by_title(self, analyzer):
        renamed = ChecklistItem(title="Purse")
        events = [forgot("Wallet", offset) for offset in range(3)]

        assert analyzer.analyze(events, [renamed]) == []

    def test_complete_events_with_forgotten_titles_count(self, analyzer, wallet):
        """Items left unchecked on 'mark all and go' still feed patterns."""
        events = [
            ExitEvent.create(
                MONDAY + timedelta(days=d), was_complete=False, forgotten_items=["Wallet"]
            )
            for d in range(2)
        ]

        [pattern] = analyzer.analyze(events, [wallet])

        assert pattern.forgotten_count == 2

    def test_min_occurrences_floor(self, wallet):
        analyzer = PatternAnalyzer(min_occurrences=1)

        assert analyzer.analyze([forgot("Wallet", 0)], [wallet]) == []


class TestTopSuggestions:
    def test_uses_store(self, store, wallet):
        store.insert(wallet)
        for offset in range(3):
            store.insert(forgot("Wallet", offset))
        analyzer = PatternAnalyzer(store=store)

        [pattern] = analyzer.top_suggestions(limit=3)

        assert pattern.item_title == "Wallet"

    def test_limit(self, store):
        for n, title in enumerate(("A", "B", "C", "D")):
            store.insert(ChecklistItem(title=title, order=n))
            for offset in range(2):
                store.insert(forgot(title, offset))

        assert len(PatternAnalyzer(store=store).top_suggestions(limit=3)) == 3

    def test_requires_store(self, analyzer):
        with pytest.raises(RuntimeError):
            analyzer.top_suggestions()
