"""Deadline watchdog: keeps the round moving when a player stops responding."""

import logging
import threading
from typing import Optional

from unotable.orchestration.orchestrator import TurnOrchestrator

logger = logging.getLogger(__name__)


class DeadlineWatchdog:
    """Calls ``orchestrator.tick()`` on a fixed interval from a daemon thread."""

    def __init__(self, orchestrator: TurnOrchestrator, interval: float = 1.0):
        self._orchestrator = orchestrator
        self._interval = interval
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="deadline-watchdog", daemon=True)
        self._thread.start()
        logger.info("Deadline watchdog started (every %.1fs)", self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Deadline watchdog stopped")

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._orchestrator.tick()
            except Exception:
                logger.exception("Deadline tick failed")
