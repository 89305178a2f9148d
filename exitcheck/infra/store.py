"""Entity store interface and the in-memory implementation.

The core only needs four operations from storage: fetch with an optional
predicate and sort, insert, delete and save. Inserted entities must be
fetchable immediately, before save().
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Store(Protocol):
    """Storage abstraction injected into the core services."""

    def fetch(
        self,
        model: type[T],
        predicate: Callable[[T], bool] | None = None,
        sort_key: Callable[[T], Any] | None = None,
        reverse: bool = False,
    ) -> list[T]: ...

    def insert(self, entity: BaseModel) -> None: ...

    def delete(self, entity: BaseModel) -> None: ...

    def save(self) -> None: ...


def select(
    entities: list[T],
    predicate: Callable[[T], bool] | None = None,
    sort_key: Callable[[T], Any] | None = None,
    reverse: bool = False,
) -> list[T]:
    """Apply predicate and sort to a list of entities."""
    selected = [e for e in entities if predicate is None or predicate(e)]
    if sort_key is not None:
        selected.sort(key=sort_key, reverse=reverse)
    return selected


class InMemoryStore:
    """Process-local store keyed by model type and entity id.

    Entities are held by reference, so in-place mutations are visible to
    every reader without a save().
    """

    def __init__(self) -> None:
        self._entities: dict[type[BaseModel], dict[str, BaseModel]] = {}
        self.save_count = 0

    def fetch(
        self,
        model: type[T],
        predicate: Callable[[T], bool] | None = None,
        sort_key: Callable[[T], Any] | None = None,
        reverse: bool = False,
    ) -> list[T]:
        entities = list(self._entities.get(model, {}).values())
        return select(entities, predicate, sort_key, reverse)  # type: ignore[arg-type]

    def insert(self, entity: BaseModel) -> None:
        self._entities.setdefault(type(entity), {})[entity.id] = entity  # type: ignore[attr-defined]

    def delete(self, entity: BaseModel) -> None:
        self._entities.get(type(entity), {}).pop(entity.id, None)  # type: ignore[attr-defined]

    def save(self) -> None:
        self.save_count += 1
