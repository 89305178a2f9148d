"""Custom exceptions for ExitCheck."""

from __future__ import annotations


class ExitCheckError(Exception):
    """Base exception for ExitCheck."""

    pass


class ValidationError(ExitCheckError):
    """Raised when input validation fails."""

    pass


class ItemNotFoundError(ExitCheckError):
    """Raised when a checklist item is not found."""

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Checklist item with ID '{item_id}' not found")


class SessionClosedError(ExitCheckError):
    """Raised when closing an exit session that was already closed."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Exit session '{session_id}' is already closed")


class NoActiveSessionError(ExitCheckError):
    """Raised when a session action is requested but no session is open."""

    def __init__(self) -> None:
        super().__init__("No exit session is open")


class PersistenceError(ExitCheckError):
    """Raised when a store operation fails."""

    pass


class SignalChannelFullError(ExitCheckError):
    """Raised when a location signal cannot be queued in time."""

    def __init__(self, signal_name: str, capacity: int) -> None:
        self.signal_name = signal_name
        self.capacity = capacity
        super().__init__(
            f"Signal channel is full ({capacity} pending); "
            f"could not queue '{signal_name}'"
        )
