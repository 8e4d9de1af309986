#!/usr/bin/env python3
"""Self re-arming periodic tasks running on background threads."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run a callable every ``interval`` seconds on a daemon thread.

    The next cycle is scheduled only after the current one returns, so
    cycles of the same task never overlap. Exceptions raised by a cycle
    are logged and the task keeps going.
    """

    def __init__(self, name: str, interval: float, func: Callable[[], object]) -> None:
        """
        Initialize the task.

        Args:
            name: Name used for the thread and log messages
            interval: Seconds to wait between the end of one cycle and the next
            func: Work performed each cycle
        """
        self.name = name
        self.interval = interval
        self.func = func
        self.cycles = 0
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        """Check if the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def run_cycle(self) -> bool:
        """
        Run one cycle, never raising.

        Returns:
            True if the cycle completed without an exception
        """
        self.cycles += 1
        try:
            self.func()
            return True
        except Exception as e:
            logger.error(f"[{self.name}] Cycle failed: {e}", exc_info=True)
            return False

    def start(self) -> None:
        """Start the background thread. Starting twice is a no-op."""
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug(f"[{self.name}] Started (every {self.interval}s)")

    def trigger(self) -> None:
        """Run the next cycle now instead of waiting for the interval."""
        self._wake.set()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop scheduling further cycles.

        A cycle already in progress is allowed to finish.

        Args:
            timeout: Seconds to wait for the thread to exit, None to not wait
        """
        self._stop.set()
        self._wake.set()
        if timeout is not None and self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stop.is_set():
            self.run_cycle()
            self._wake.wait(timeout=self.interval)
            self._wake.clear()
        logger.debug(f"[{self.name}] Stopped")
