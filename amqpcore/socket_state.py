"""Readiness tracking for a non-blocking socket."""

from __future__ import annotations

import enum
import logging
import queue
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SocketEvent(enum.Enum):
    """An event signalled to a socket by the reactor."""

    READABLE = "readable"
    WRITABLE = "writable"
    WAKE = "wake"


class SocketStateHandle:
    """A cloneable sender of events to a SocketState."""

    def __init__(self, events: queue.SimpleQueue) -> None:
        self._events = events

    def send(self, event: SocketEvent) -> None:
        """Deliver ``event`` to the socket state."""
        self._events.put(event)

    def wake(self) -> None:
        """Wake up whoever is waiting on the socket state."""
        self.send(SocketEvent.WAKE)


class SocketState:
    """Whether a socket is currently readable and writable."""

    def __init__(self) -> None:
        self.readable = True
        self.writable = True
        self._events: queue.SimpleQueue = queue.SimpleQueue()
        self._handle = SocketStateHandle(self._events)

    def wait(self) -> None:
        """Block until one event arrives and apply it."""
        self._handle_event(self._events.get())

    def handle(self) -> SocketStateHandle:
        """Return a handle that can send events to this state."""
        return self._handle

    def handle_read_poll(self, result: int | None) -> int | None:
        """Pass a read result through; None means it would block."""
        if result is None:
            self.readable = False
        return result

    def handle_write_poll(self, result: T | None) -> T | None:
        """Pass a write result through; None means it would block."""
        if result is None:
            self.writable = False
        return result

    def handle_io_result(self, error: BaseException | None) -> None:
        """Swallow transient I/O errors, re-raise anything else."""
        if error is None:
            return
        if isinstance(error, InterruptedError):
            self._handle.wake()
        elif isinstance(error, BlockingIOError):
            pass  # the reactor will report readiness again
        else:
            raise error

    def poll_events(self) -> None:
        """Apply every event already queued, without blocking."""
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return
            self._handle_event(event)

    def _handle_event(self, event: SocketEvent) -> None:
        logger.debug("Got event for socket: %s", event)
        if event is SocketEvent.READABLE:
            self.readable = True
        elif event is SocketEvent.WRITABLE:
            self.writable = True