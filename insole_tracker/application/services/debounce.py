"""Trailing-edge debouncer on the asyncio event loop."""

import asyncio
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Delays a call until ``delay`` seconds pass without another ``call``.

    Each call replaces the pending one; only the last arguments are used.
    """

    def __init__(self, callback: Callable[..., Any], delay: float = 0.3) -> None:
        self._callback = callback
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple[Any, ...]) -> None:
        self._handle = None
        self._callback(*args)
