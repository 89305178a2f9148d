"""Signal channel between the platform delivery context and the core.

Platform callbacks may fire on any thread. They only post() here; the
coordination context calls drain() and every signal is handled there, one
at a time, so core state is never touched concurrently.
"""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable

from ..domain.exceptions import SignalChannelFullError
from ..domain.models import LocationSignal

logger = logging.getLogger(__name__)

SignalHandler = Callable[[LocationSignal], None]


class SignalChannel:
    """Bounded FIFO of location signals."""

    def __init__(self, maxsize: int = 64, post_timeout: float = 1.0) -> None:
        self._queue: queue.Queue[LocationSignal] = queue.Queue(maxsize=maxsize)
        self._maxsize = maxsize
        self._post_timeout = post_timeout

    def post(self, signal: LocationSignal) -> None:
        """Queue a signal. Safe to call from any thread.

        Raises:
            SignalChannelFullError: If the queue stays full for post_timeout.
        """
        try:
            self._queue.put(signal, timeout=self._post_timeout)
        except queue.Full:
            raise SignalChannelFullError(signal.kind, self._maxsize) from None

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self, handler: SignalHandler, limit: int | None = None) -> int:
        """Hand queued signals to handler in arrival order.

        Call only from the coordination context.

        Args:
            handler: Receives each signal.
            limit: Optional maximum number of signals to handle.

        Returns:
            Number of signals handled.
        """
        handled = 0
        while limit is None or handled < limit:
            try:
                signal = self._queue.get_nowait()
            except queue.Empty:
                break
            try:
                handler(signal)
            finally:
                self._queue.task_done()
            handled += 1
        if handled:
            logger.debug(f"Drained {handled} location signals")
        return handled
