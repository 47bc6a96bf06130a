"""Host scheduler that drives the draft countdown."""

import logging
import threading
import time
from typing import Callable, Optional

from src.draft_engine.draft_orchestrator import DraftOrchestrator
from src.draft_engine.draft_state import DraftPhase, DraftState

logger = logging.getLogger(__name__)


class DraftClock:
    """Calls DraftOrchestrator.tick() once per interval while the draft is active.

    ``run()`` blocks the caller; ``start()``/``stop()`` run the same loop on a
    background thread.
    """

    def __init__(
        self,
        orchestrator: DraftOrchestrator,
        interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        on_tick: Optional[Callable[[DraftState], None]] = None,
    ):
        self.orchestrator = orchestrator
        self.interval = interval
        self.sleep = sleep
        self.on_tick = on_tick
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _active(self) -> bool:
        return self.orchestrator.draft_state.phase == DraftPhase.ACTIVE

    def _tick(self):
        state = self.orchestrator.tick()
        if self.on_tick is not None:
            self.on_tick(state)

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Tick until the draft leaves the active phase or max_ticks is reached.

        Returns:
            Number of ticks delivered.
        """
        ticks = 0
        while self._active() and (max_ticks is None or ticks < max_ticks):
            self.sleep(self.interval)
            self._tick()
            ticks += 1
        return ticks

    def start(self):
        """Run the countdown on a daemon thread."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_in_background, name="draft-clock", daemon=True
        )
        self._thread.start()
        logger.debug("Draft clock started (interval=%.2fs)", self.interval)

    def stop(self, timeout: Optional[float] = None):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.debug("Draft clock stopped")

    def _run_in_background(self):
        while self._active() and not self._stop_event.wait(self.interval):
            self._tick()
