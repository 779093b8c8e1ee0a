"""
Game controller for front-ends.

Holds the one current Session, replaces it with the result of each
operation and keeps the clock ticker in step with the game status.
"""
import logging
import random
import threading
from typing import Callable, Optional

from .board import BoardConfig, DEFAULT_CONFIG
from .session import (
    Session,
    on_reveal,
    on_toggle_flag,
    reset,
    tick,
)
from .timer import Ticker

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session], None]


# ============================================================================
# Game Controller
# ============================================================================

class GameController:
    """
    Owns the current session and its clock.

    Every operation returns the session after it ran. When the session
    changes, the listener (if any) receives the new snapshot; rejected
    operations leave the session untouched and notify nobody.
    """

    def __init__(
        self,
        config: BoardConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        listener: Optional[SessionListener] = None,
        ticker_factory: Callable[[Callable[[], None]], Ticker] = Ticker,
    ) -> None:
        """
        Initialize the controller.

        Args:
            config: Board configuration for every game.
            rng: Random source for mine placement.
            listener: Called with each new session snapshot.
            ticker_factory: Builds the ticker from a callback.
        """
        # Reentrant so listeners may read `session` while being notified
        self._lock = threading.RLock()
        self._session = Session.from_config(config)
        self._rng = rng
        self._listener = listener
        self._ticker = ticker_factory(self.tick)

    @property
    def session(self) -> Session:
        with self._lock:
            return self._session

    @property
    def ticker(self) -> Ticker:
        return self._ticker

    # ========================================================================
    # Gestures
    # ========================================================================

    def reveal(self, row: int, col: int) -> Session:
        """Reveal a cell (tap)."""
        return self._apply(lambda session: on_reveal(session, row, col, self._rng))

    def toggle_flag(self, row: int, col: int) -> Session:
        """Toggle a flag (long press)."""
        return self._apply(lambda session: on_toggle_flag(session, row, col))

    def reset(self) -> Session:
        """Start a new game (face button)."""
        return self._apply(reset)

    def tick(self) -> Session:
        """Advance the clock by one second."""
        return self._apply(tick)

    def close(self) -> None:
        """Stop the clock ticker."""
        self._ticker.stop()

    # ========================================================================
    # Internals
    # ========================================================================

    def _apply(self, operation: Callable[[Session], Session]) -> Session:
        with self._lock:
            current = self._session
            updated = operation(current)
            if updated is current:
                return current
            self._session = updated
            self._sync_ticker(updated)

            if current.status != updated.status:
                logger.debug("Status %s -> %s", current.status.name, updated.status.name)
            # Listeners run under the lock, in replacement order
            if self._listener is not None:
                self._listener(updated)
        return updated

    def _sync_ticker(self, session: Session) -> None:
        if session.is_playing and session.timer_running:
            self._ticker.start()
        else:
            self._ticker.stop()
