"""Repeating timer abstraction used to drive the notification scheduler."""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional


class RepeatingTimer(ABC):
    """A single repeating task with cancel semantics."""

    @abstractmethod
    def start(self, interval: float, callback: Callable[[], None]) -> None:
        """Call ``callback`` every ``interval`` seconds until cancelled."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Stop the timer. No callback runs after this returns."""
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        pass


class AsyncioRepeatingTimer(RepeatingTimer):
    """Repeating timer driven by an asyncio event loop.

    Callbacks run on the loop's thread, one at a time, so they never
    overlap with other work scheduled on the same loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize the timer.

        Args:
            loop: Event loop to schedule on (default: the running loop at start)
        """
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._interval = 0.0
        self._callback: Optional[Callable[[], None]] = None
        self._running = False

    @property
    def active(self) -> bool:
        return self._running

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        if self._running:
            raise RuntimeError("Timer is already running")
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")

        if self._loop is None:
            self._loop = asyncio.get_running_loop()

        self._interval = interval
        self._callback = callback
        self._running = True
        self._handle = self._loop.call_later(self._interval, self._fire)

    def cancel(self) -> None:
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if not self._running:
            return

        try:
            self._callback()
        finally:
            # The callback may have cancelled us
            if self._running:
                self._handle = self._loop.call_later(self._interval, self._fire)
