"""Model-to-table mappings for the KùzuDB store.

Each mapping knows the node table, its columns, and how to convert between
a model instance and a parameter dict / result row. Column order in the
SELECT query matches the order of `columns`.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from ...domain.models import ChecklistItem, ExitEvent, HomeLocation


def _aware(value: datetime | None) -> datetime | None:
    """KùzuDB returns naive UTC timestamps; attach the UTC zone."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _utc(value: datetime | None) -> datetime | None:
    """TIMESTAMP columns hold naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class EntityMapping:
    """How one model type is stored in one node table."""

    table: str
    columns: tuple[str, ...]
    to_params: Callable[[Any], dict[str, Any]]
    from_row: Callable[[list[Any]], BaseModel]

    def select_query(self) -> str:
        returned = ", ".join(f"n.{col}" for col in self.columns)
        return f"MATCH (n:{self.table}) RETURN {returned}"

    def upsert_query(self) -> str:
        assignments = ", ".join(
            f"n.{col} = ${col}" for col in self.columns if col != "id"
        )
        return (
            f"MERGE (n:{self.table} {{id: $id}}) "
            f"ON CREATE SET {assignments} "
            f"ON MATCH SET {assignments}"
        )

    def delete_query(self) -> str:
        return f"MATCH (n:{self.table} {{id: $id}}) DELETE n"


# =============================================================================
# HomeLocation
# =============================================================================


def _home_to_params(home: HomeLocation) -> dict[str, Any]:
    return {
        "id": home.id,
        "latitude": home.latitude,
        "longitude": home.longitude,
        "radius": home.radius,
        "name": home.name,
        "created_at": _utc(home.created_at),
        "updated_at": _utc(home.updated_at),
    }


def _row_to_home(row: list[Any]) -> HomeLocation:
    return HomeLocation(
        id=row[0],
        latitude=row[1],
        longitude=row[2],
        radius=row[3],
        name=row[4],
        created_at=_aware(row[5]),
        updated_at=_aware(row[6]),
    )


# =============================================================================
# ChecklistItem
# =============================================================================


def _item_to_params(item: ChecklistItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "title": item.title,
        "emoji": item.emoji,
        "sort_order": item.order,
        "is_active": item.is_active,
        "category": item.category,
        "created_at": _utc(item.created_at),
        "forgotten_count": item.forgotten_count,
        "last_forgotten_at": _utc(item.last_forgotten_at),
    }


def _row_to_item(row: list[Any]) -> ChecklistItem:
    return ChecklistItem(
        id=row[0],
        title=row[1],
        emoji=row[2] or "",
        order=row[3] if row[3] is not None else 0,
        is_active=bool(row[4]),
        category=row[5],
        created_at=_aware(row[6]),
        forgotten_count=row[7] or 0,
        last_forgotten_at=_aware(row[8]),
    )


# =============================================================================
# ExitEvent
# =============================================================================


def _event_to_params(event: ExitEvent) -> dict[str, Any]:
    return {
        "id": event.id,
        "timestamp": _utc(event.timestamp),
        "was_complete": event.was_complete,
        "dismissed_early": event.dismissed_early,
        "forgotten_items": json.dumps(list(event.forgotten_items)),
        "day_of_week": event.day_of_week,
        "hour_of_day": event.hour_of_day,
    }


def _row_to_event(row: list[Any]) -> ExitEvent:
    return ExitEvent(
        id=row[0],
        timestamp=_aware(row[1]),
        was_complete=bool(row[2]),
        dismissed_early=bool(row[3]),
        forgotten_items=tuple(json.loads(row[4])) if row[4] else (),
        day_of_week=row[5],
        hour_of_day=row[6],
    )


MAPPINGS: dict[type[BaseModel], EntityMapping] = {
    HomeLocation: EntityMapping(
        table="HomeLocation",
        columns=(
            "id",
            "latitude",
            "longitude",
            "radius",
            "name",
            "created_at",
            "updated_at",
        ),
        to_params=_home_to_params,
        from_row=_row_to_home,
    ),
    ChecklistItem: EntityMapping(
        table="ChecklistItem",
        columns=(
            "id",
            "title",
            "emoji",
            "sort_order",
            "is_active",
            "category",
            "created_at",
            "forgotten_count",
            "last_forgotten_at",
        ),
        to_params=_item_to_params,
        from_row=_row_to_item,
    ),
    ExitEvent: EntityMapping(
        table="ExitEvent",
        columns=(
            "id",
            "timestamp",
            "was_complete",
            "dismissed_early",
            "forgotten_items",
            "day_of_week",
            "hour_of_day",
        ),
        to_params=_event_to_params,
        from_row=_row_to_event,
    ),
}
