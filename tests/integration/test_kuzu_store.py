"""Integration tests for the KùzuDB store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from exitcheck.domain.exceptions import PersistenceError
from exitcheck.domain.models import (
    ChecklistItem,
    ExitEvent,
    HomeLocation,
    StreakState,
)
from exitcheck.infra import DatabaseConnection, KuzuStore

T0 = datetime(2024, 1, 8, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def db_path(temp_data_dir):
    return temp_data_dir / "store_db"


def reopen(db: DatabaseConnection, db_path) -> tuple[DatabaseConnection, KuzuStore]:
    db.close()
    fresh = DatabaseConnection(db_path)
    return fresh, KuzuStore(fresh)


class TestKuzuStore:
    """Tests for KuzuStore persistence."""

    def test_schema_initialization(self, db_path):
        db = DatabaseConnection(db_path)
        try:
            result = db.execute("MATCH (n:ChecklistItem) RETURN count(n)")
            assert result.has_next()
            assert result.get_next()[0] == 0
        finally:
            db.close()

    def test_inserted_entities_visible_before_save(self, db_path):
        db = DatabaseConnection(db_path)
        store = KuzuStore(db)
        try:
            item = ChecklistItem(title="Keys")
            store.insert(item)

            assert store.fetch(ChecklistItem) == [item]
        finally:
            db.close()

    def test_round_trip(self, db_path):
        db = DatabaseConnection(db_path)
        store = KuzuStore(db)
        home = HomeLocation(latitude=35.68, longitude=139.76, radius=150, name="Flat")
        item = ChecklistItem(title="Wallet", emoji="👛", order=1, category="daily")
        event = ExitEvent.create(
            T0, was_complete=False, dismissed_early=True, forgotten_items=["Wallet"]
        )
        for entity in (home, item, event):
            store.insert(entity)
        store.save()

        db, store = reopen(db, db_path)
        try:
            [loaded_home] = store.fetch(HomeLocation)
            [loaded_item] = store.fetch(ChecklistItem)
            [loaded_event] = store.fetch(ExitEvent)

            assert loaded_home.id == home.id
            assert loaded_home.radius == 150.0
            assert loaded_home.name == "Flat"
            assert loaded_item.title == "Wallet"
            assert loaded_item.order == 1
            assert loaded_item.category == "daily"
            assert loaded_item.last_forgotten_at is None
            assert loaded_event.timestamp == T0
            assert loaded_event.forgotten_items == ("Wallet",)
            assert loaded_event.day_of_week == 1
            assert loaded_event.hour_of_day == 8
            assert loaded_event.dismissed_early is True
        finally:
            db.close()

    def test_mutations_survive_reopen(self, db_path):
        db = DatabaseConnection(db_path)
        store = KuzuStore(db)
        item = ChecklistItem(title="Phone")
        store.insert(item)
        store.save()

        item.mark_forgotten(T0)
        item.mark_forgotten(T0 + timedelta(days=1))
        store.save()

        db, store = reopen(db, db_path)
        try:
            [loaded] = store.fetch(ChecklistItem)
            assert loaded.forgotten_count == 2
            assert loaded.last_forgotten_at == T0 + timedelta(days=1)
        finally:
            db.close()

    def test_delete(self, db_path):
        db = DatabaseConnection(db_path)
        store = KuzuStore(db)
        keep = ChecklistItem(title="Keys")
        drop = ChecklistItem(title="Umbrella")
        store.insert(keep)
        store.insert(drop)
        store.save()

        store.delete(drop)
        assert store.fetch(ChecklistItem) == [keep]
        store.save()

        db, store = reopen(db, db_path)
        try:
            assert [i.title for i in store.fetch(ChecklistItem)] == ["Keys"]
        finally:
            db.close()

    def test_delete_before_save_writes_nothing(self, db_path):
        db = DatabaseConnection(db_path)
        store = KuzuStore(db)
        event = ExitEvent.create(T0, was_complete=True)
        store.insert(event)
        store.delete(event)
        store.save()

        db, store = reopen(db, db_path)
        try:
            assert store.fetch(ExitEvent) == []
        finally:
            db.close()

    def test_fetch_with_predicate_and_sort(self, db_path):
        db = DatabaseConnection(db_path)
        store = KuzuStore(db)
        try:
            for order, title in [(2, "C"), (0, "A"), (1, "B")]:
                store.insert(ChecklistItem(title=title, order=order, is_active=title != "B"))
            store.save()

            active = store.fetch(
                ChecklistItem, predicate=lambda i: i.is_active, sort_key=lambda i: i.order
            )

            assert [i.title for i in active] == ["A", "C"]
        finally:
            db.close()

    def test_unmapped_model(self, db_path):
        db = DatabaseConnection(db_path)
        try:
            with pytest.raises(PersistenceError):
                KuzuStore(db).fetch(StreakState)
        finally:
            db.close()
