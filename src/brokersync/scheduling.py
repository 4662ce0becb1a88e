"""Periodic invocation of the reconciliation task."""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING

from brokersync.domain.reconciliation.tracking import RunTracker

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


class PeriodicScheduler:
    """Run ``job`` every ``interval_seconds`` on a background thread.

    The first run happens immediately. ``stop()`` waits up to
    ``shutdown_timeout_seconds`` for an in-flight run to finish.
    """

    def __init__(
        self,
        job: Callable[[], object],
        *,
        interval_seconds: float,
        tracker: RunTracker | None = None,
        shutdown_timeout_seconds: float = 30.0,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._job = job
        self._interval = interval_seconds
        self._tracker = tracker or RunTracker()
        self._shutdown_timeout = shutdown_timeout_seconds
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("Scheduler already started")
        self._stopped.clear()
        self._thread = threading.Thread(target=self._loop, name="brokersync-scheduler", daemon=True)
        self._thread.start()
        log.info(f"Brokers and access resync schedule: every {self._interval}s")

    def stop(self) -> bool:
        """Stop scheduling and drain; return ``False`` if the drain timed out."""

        self._stopped.set()
        drained = self._tracker.wait(self._shutdown_timeout)
        if not drained:
            log.error(f"Shutdown took more than {self._shutdown_timeout}s")
        if self._thread is not None and drained:
            self._thread.join(self._shutdown_timeout)
        self._thread = None
        return drained

    def wait(self) -> None:
        """Block the calling thread until ``stop()`` is called."""

        self._stopped.wait()

    def _loop(self) -> None:
        while not self._stopped.is_set():
            try:
                self._job()
            except Exception:
                log.exception("Scheduled job failed")
            self._stopped.wait(self._interval)
