"""Bookkeeping of in-flight reconciliation passes.

The host process consults the tracker while shutting down so that a running
pass gets a chance to finish. It does not guard any shared data.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class RunTracker:
    """Thread-safe counter of passes currently executing."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        with self._condition:
            return self._in_flight

    def begin(self) -> None:
        with self._condition:
            self._in_flight += 1

    def end(self) -> None:
        with self._condition:
            if self._in_flight == 0:
                raise RuntimeError("RunTracker.end() called without a matching begin()")
            self._in_flight -= 1
            if self._in_flight == 0:
                self._condition.notify_all()

    @contextmanager
    def track(self) -> Iterator[None]:
        self.begin()
        try:
            yield
        finally:
            self.end()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no pass is in flight; return ``False`` on timeout."""

        deadline = None if timeout is None else time.monotonic() + timeout
        with self._condition:
            while self._in_flight:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._condition.wait(remaining)
            return True
