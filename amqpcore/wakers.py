"""A set of wake-up callbacks fired together."""

from __future__ import annotations

import threading
from collections.abc import Callable


class Wakers:
    """Collects distinct callbacks and calls them all on wake."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._wakers: list[Callable[[], object]] = []

    def register(self, waker: Callable[[], object]) -> None:
        """Add ``waker`` unless an equal one is already registered."""
        with self._lock:
            if waker not in self._wakers:
                self._wakers.append(waker)

    def wake(self) -> None:
        """Call and forget every registered waker."""
        with self._lock:
            wakers, self._wakers = self._wakers, []
        for waker in wakers:
            waker()