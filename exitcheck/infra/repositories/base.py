"""Base mixin for the KùzuDB-backed store.

Provides query execution and the unit-of-work bookkeeping:
- an identity map of loaded/inserted entities per model type
- a snapshot of the last persisted parameters, used to skip clean rows
- pending deletes, applied on save()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from ...domain.exceptions import PersistenceError
from ..database import DatabaseConnection
from .mappings import MAPPINGS, EntityMapping

if TYPE_CHECKING:
    import kuzu

logger = logging.getLogger(__name__)


class BaseStoreMixin:
    """Shared state and helpers for the KùzuDB store."""

    _db: DatabaseConnection
    _identity_map: dict[type[BaseModel], dict[str, BaseModel]]
    _persisted: dict[tuple[type[BaseModel], str], dict[str, Any]]
    _pending_deletes: dict[tuple[type[BaseModel], str], BaseModel]

    def _init_base(self, db: DatabaseConnection) -> None:
        self._db = db
        self._identity_map = {}
        self._persisted = {}
        self._pending_deletes = {}

    # =========================================================================
    # Query Execution
    # =========================================================================

    def _execute(self, query: str, parameters: dict | None = None) -> kuzu.QueryResult:
        return self._db.execute(query, parameters=parameters)

    # =========================================================================
    # Identity Map
    # =========================================================================

    @staticmethod
    def _mapping_for(model: type[BaseModel]) -> EntityMapping:
        try:
            return MAPPINGS[model]
        except KeyError:
            raise PersistenceError(
                f"No table mapping for model '{model.__name__}'"
            ) from None

    def _ensure_loaded(self, model: type[BaseModel]) -> dict[str, BaseModel]:
        """Load every row of a model's table into the identity map once."""
        if model in self._identity_map:
            return self._identity_map[model]

        mapping = self._mapping_for(model)
        loaded: dict[str, BaseModel] = {}
        try:
            result = self._execute(mapping.select_query())
            while result.has_next():
                entity = mapping.from_row(result.get_next())
                loaded[entity.id] = entity  # type: ignore[attr-defined]
                self._persisted[(model, entity.id)] = mapping.to_params(entity)  # type: ignore[attr-defined]
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to load {mapping.table}: {e}") from e

        logger.debug(f"Loaded {len(loaded)} {mapping.table} rows")
        self._identity_map[model] = loaded
        return loaded
