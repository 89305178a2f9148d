"""Persistence for the process-wide streak state.

The streak lives outside the entity store, from app install until app data
reset. The file-backed repository writes a JSON document under a FileLock so
that a host and a background worker never interleave writes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from filelock import FileLock, Timeout
from pydantic import ValidationError as PydanticValidationError

from ..domain.exceptions import PersistenceError
from ..domain.models import StreakState

logger = logging.getLogger(__name__)


class StreakStateRepository(Protocol):
    def load(self) -> StreakState: ...

    def save(self, state: StreakState) -> None: ...


class InMemoryStreakStateRepository:
    """Keeps the streak state for the lifetime of the process."""

    def __init__(self, state: StreakState | None = None) -> None:
        self._state = state or StreakState()

    def load(self) -> StreakState:
        return self._state.model_copy()

    def save(self, state: StreakState) -> None:
        self._state = state.model_copy()


class JsonStreakStateRepository:
    """Stores the streak state as a JSON document on disk."""

    def __init__(self, path: Path, lock_timeout: float = 5.0) -> None:
        """Initialize the repository.

        Args:
            path: Location of the JSON document.
            lock_timeout: Seconds to wait for the file lock.
        """
        self._path = path
        self._lock_path = path.with_name(path.name + ".lock")
        self._lock_timeout = lock_timeout

    def load(self) -> StreakState:
        if not self._path.exists():
            return StreakState()

        try:
            with FileLock(self._lock_path, timeout=self._lock_timeout):
                raw = self._path.read_text(encoding="utf-8")
        except Timeout as e:
            raise PersistenceError(f"Streak state is locked: {self._path}") from e

        try:
            return StreakState.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(f"Discarding unreadable streak state at {self._path}: {e}")
            return StreakState()

    def save(self, state: StreakState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            with FileLock(self._lock_path, timeout=self._lock_timeout):
                tmp_path.write_text(state.model_dump_json(), encoding="utf-8")
                tmp_path.replace(self._path)
        except Timeout as e:
            raise PersistenceError(f"Streak state is locked: {self._path}") from e
        except OSError as e:
            raise PersistenceError(f"Failed to write streak state: {e}") from e
        logger.debug(f"Streak state written to {self._path}")
