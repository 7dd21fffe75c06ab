"""A shared slot for a worker thread that can be joined once."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any


class ResultThread(threading.Thread):
    """A thread that keeps its target's return value or exception."""

    def __init__(self, target: Callable[[], Any], name: str | None = None) -> None:
        super().__init__(name=name)
        self._work = target
        self._value: Any = None
        self._error: BaseException | None = None
        self._finished = False

    def run(self) -> None:
        try:
            self._value = self._work()
        except BaseException as exc:  # kept to be re-raised by result()
            self._error = exc
        finally:
            self._finished = True

    def result(self) -> Any:
        """Return the target's value, or raise what it raised."""
        if not self._finished:
            raise RuntimeError("thread has not finished")
        if self._error is not None:
            raise self._error
        return self._value


class ThreadHandle:
    """Holds at most one thread; waiting joins it and reports its outcome."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    def register(self, thread: threading.Thread) -> None:
        """Store ``thread``, replacing any previous one."""
        with self._lock:
            self._thread = thread

    def _take(self) -> threading.Thread | None:
        with self._lock:
            thread, self._thread = self._thread, None
        return thread

    def wait(self, context: str) -> None:
        """Join the registered thread unless called from it.

        An exception raised by the thread's work is re-raised; an abnormal
        exit is reported as RuntimeError carrying ``context``.
        """
        thread = self._take()
        if thread is None or thread is threading.current_thread():
            return
        thread.join()
        if isinstance(thread, ResultThread):
            try:
                thread.result()
            except Exception:
                raise
            except BaseException as exc:
                raise RuntimeError(context) from exc