"""
Game clock for a Minesweeper board.

A GameTimer calls its callback once per interval on a daemon
threading.Timer, re-arming itself after each tick until stopped.
"""
import threading
from typing import Callable, Optional


# ============================================================================
# Game Timer
# ============================================================================

class GameTimer:
    """
    Periodic ticker driving a board's elapsed-seconds counter.

    The callback runs on a background thread; whatever it mutates must
    be guarded by the owner's lock.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float = 1.0,
    ) -> None:
        """
        Initialize the timer.

        Args:
            callback: Called once per elapsed interval.
            interval: Seconds between ticks.
        """
        if interval <= 0:
            raise ValueError("Timer interval must be positive")
        self.callback = callback
        self.interval = interval
        self._lock = threading.Lock()
        self._handle: Optional[threading.Timer] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if the timer is ticking."""
        return self._running

    def start(self) -> None:
        """Start ticking. Does nothing if already running."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()

    def stop(self) -> None:
        """Stop ticking. Safe to call on a stopped timer."""
        with self._lock:
            self._running = False
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None

    def _schedule(self) -> None:
        """Arm the next tick. Caller holds the lock."""
        self._handle = threading.Timer(self.interval, self._tick)
        self._handle.daemon = True
        self._handle.start()

    def _tick(self) -> None:
        if not self._running:
            return
        self.callback()
        with self._lock:
            if self._running:
                self._schedule()
