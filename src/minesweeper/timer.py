"""
Periodic ticker driving the game clock.

The session never advances its own clock; something outside has to call
tick() once per second while a game is playing. Ticker is that scheduler.
"""
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Ticker:
    """
    Calls a callback at a fixed interval on a daemon thread.

    start() while already running does nothing, so rapid state changes
    never schedule a second chain of callbacks. stop() cancels the pending
    call; a callback already in flight will not reschedule itself.
    """

    def __init__(self, callback: Callable[[], None], interval: float = 1.0) -> None:
        """
        Initialize the ticker.

        Args:
            callback: Called once per interval while running.
            interval: Seconds between calls.
        """
        self._callback = callback
        self._interval = interval
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        # Bumped on every start/stop so stale timers can tell they were
        # cancelled after they had already fired.
        self._generation = 0

    @property
    def running(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def interval(self) -> float:
        return self._interval

    def start(self) -> bool:
        """
        Start ticking.

        Returns:
            True if the ticker was started, False if it was already running.
        """
        with self._lock:
            if self._timer is not None:
                return False
            self._generation += 1
            self._schedule(self._generation)
        logger.debug("Ticker started (every %.2fs)", self._interval)
        return True

    def stop(self) -> bool:
        """
        Stop ticking.

        Returns:
            True if the ticker was stopped, False if it was not running.
        """
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
        logger.debug("Ticker stopped")
        return True

    def _schedule(self, generation: int) -> None:
        timer = threading.Timer(self._interval, self._fire, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return

        self._callback()

        with self._lock:
            if generation == self._generation:
                self._schedule(generation)
