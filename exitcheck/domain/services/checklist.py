"""Checklist Service - user edits of checklist items."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import ItemNotFoundError, ValidationError
from ..models import ChecklistItem

if TYPE_CHECKING:
    from ...infra.store import Store

logger = logging.getLogger(__name__)


class ChecklistService:
    """Adds, edits, reorders and removes checklist items."""

    def __init__(self, store: Store) -> None:
        self._store = store

    def _validate_title(self, title: str) -> str:
        if not title or not title.strip():
            raise ValidationError("Title cannot be empty")
        return title.strip()

    def items(self, active_only: bool = False) -> list[ChecklistItem]:
        """Items in display order."""
        return self._store.fetch(
            ChecklistItem,
            predicate=(lambda i: i.is_active) if active_only else None,
            sort_key=lambda i: i.order,
        )

    def get(self, item_id: str) -> ChecklistItem:
        found = self._store.fetch(ChecklistItem, predicate=lambda i: i.id == item_id)
        if not found:
            raise ItemNotFoundError(item_id)
        return found[0]

    def add_item(
        self,
        title: str,
        emoji: str = "",
        category: str | None = None,
    ) -> ChecklistItem:
        """Append a new active item at the end of the list."""
        existing = self.items()
        next_order = max((i.order for i in existing), default=-1) + 1
        item = ChecklistItem(
            title=self._validate_title(title),
            emoji=emoji,
            category=category,
            order=next_order,
        )
        self._store.insert(item)
        self._store.save()
        logger.info(f"Added checklist item '{item.title}' at position {next_order}")
        return item

    def update_item(
        self,
        item_id: str,
        title: str | None = None,
        emoji: str | None = None,
        category: str | None = None,
        is_active: bool | None = None,
    ) -> ChecklistItem:
        """Edit an item. Renaming detaches it from its forgotten history."""
        item = self.get(item_id)
        if title is not None:
            item.title = self._validate_title(title)
        if emoji is not None:
            item.emoji = emoji
        if category is not None:
            item.category = category
        if is_active is not None:
            item.is_active = is_active
        self._store.save()
        return item

    def move_to_top(self, item_id: str) -> ChecklistItem:
        """Put an item first and shift the others down, keeping their order."""
        item = self.get(item_id)
        others = [i for i in self.items() if i.id != item_id]
        item.order = 0
        for position, other in enumerate(others, start=1):
            other.order = position
        self._store.save()
        logger.info(f"Moved '{item.title}' to the top of the checklist")
        return item

    def delete_item(self, item_id: str) -> None:
        item = self.get(item_id)
        self._store.delete(item)
        self._store.save()
        logger.info(f"Deleted checklist item '{item.title}'")
