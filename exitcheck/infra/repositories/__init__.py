"""KùzuDB implementation of the entity store.

The store works as a unit of work over an identity map:
- fetch() loads a model's table once, then serves from memory, so inserted
  entities are visible immediately and mutations on fetched entities are
  picked up by the next save()
- save() upserts new or changed rows and applies pending deletes
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

from ...domain.exceptions import PersistenceError
from ..database import DatabaseConnection
from ..store import select
from .base import BaseStoreMixin

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class KuzuStore(BaseStoreMixin):
    """Store backed by a KùzuDB database."""

    def __init__(self, db: DatabaseConnection) -> None:
        """Initialize the store.

        Args:
            db: Database connection.
        """
        self._init_base(db)

    def fetch(
        self,
        model: type[T],
        predicate: Callable[[T], bool] | None = None,
        sort_key: Callable[[T], Any] | None = None,
        reverse: bool = False,
    ) -> list[T]:
        entities = list(self._ensure_loaded(model).values())
        return select(entities, predicate, sort_key, reverse)  # type: ignore[arg-type]

    def insert(self, entity: BaseModel) -> None:
        model = type(entity)
        entity_id = entity.id  # type: ignore[attr-defined]
        self._ensure_loaded(model)[entity_id] = entity
        self._pending_deletes.pop((model, entity_id), None)

    def delete(self, entity: BaseModel) -> None:
        model = type(entity)
        entity_id = entity.id  # type: ignore[attr-defined]
        self._ensure_loaded(model).pop(entity_id, None)
        if (model, entity_id) in self._persisted:
            self._pending_deletes[(model, entity_id)] = entity

    def save(self) -> None:
        """Persist new and changed entities, then apply deletes."""
        written = 0
        try:
            for model, entities in self._identity_map.items():
                mapping = self._mapping_for(model)
                query = mapping.upsert_query()
                for entity_id, entity in entities.items():
                    params = mapping.to_params(entity)
                    if self._persisted.get((model, entity_id)) == params:
                        continue
                    self._execute(query, parameters=params)
                    self._persisted[(model, entity_id)] = params
                    written += 1

            for (model, entity_id) in list(self._pending_deletes):
                mapping = self._mapping_for(model)
                self._execute(mapping.delete_query(), parameters={"id": entity_id})
                self._persisted.pop((model, entity_id), None)
                del self._pending_deletes[(model, entity_id)]
                written += 1
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to save changes: {e}") from e

        if written:
            logger.debug(f"Saved {written} row changes")


__all__ = ["KuzuStore"]
