"""Debounced task scheduling on the asyncio event loop.

A DebouncedTask holds at most one pending timer. Scheduling again cancels
the pending timer and bumps the generation token, so only the last request
of a burst runs, once the quiet period has elapsed. A run that has already
started is never interrupted; it is simply superseded by the next one.
"""

import asyncio
from collections.abc import Callable


class DebouncedTask:
    """Fire-after-quiet-period wrapper around a callback."""

    def __init__(
        self,
        delay_seconds: float,
        callback: Callable[[int], None],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        on_superseded: Callable[[int], None] | None = None,
    ) -> None:
        """Initialize the task.

        Args:
            delay_seconds: Quiet period; 0 runs the callback inline on schedule
            callback: Called with the generation token of the run
            loop: Event loop for timers (default: the running loop at schedule time)
            on_superseded: Called with the token of a pending run that got replaced
        """
        self._delay = delay_seconds
        self._callback = callback
        self._loop = loop
        self._on_superseded = on_superseded
        self._handle: asyncio.TimerHandle | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """Token of the most recent schedule request."""
        return self._generation

    @property
    def pending(self) -> bool:
        """True while a scheduled run is waiting for its quiet period."""
        return self._handle is not None

    def schedule(self) -> int:
        """Request a run, replacing any pending one.

        Returns:
            The generation token of the new request

        Raises:
            RuntimeError: If delay is positive and no event loop is available
        """
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            if self._on_superseded:
                self._on_superseded(self._generation)

        self._generation += 1
        token = self._generation

        if self._delay <= 0:
            self._callback(token)
            return token

        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, token)
        return token

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> bool:
        """Run the pending request now instead of waiting.

        Returns:
            True if a pending run was executed
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._callback(self._generation)
        return True

    def _fire(self, token: int) -> None:
        if token != self._generation:
            return  # Replaced by a newer request
        self._handle = None
        self._callback(token)
