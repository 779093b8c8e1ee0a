"""
Unit tests for GameController.

A recording ticker stands in for the threaded one.
"""
import random
import threading

import pytest
from minesweeper import BoardConfig, GameController, GameStatus


class RecordingTicker:
    """Ticker double that tracks start/stop calls."""

    def __init__(self, callback):
        self.callback = callback
        self.running = False
        self.starts = 0
        self.stops = 0

    def start(self):
        if self.running:
            return False
        self.running = True
        self.starts += 1
        return True

    def stop(self):
        if not self.running:
            return False
        self.running = False
        self.stops += 1
        return True


@pytest.fixture
def snapshots():
    return []


@pytest.fixture
def controller(snapshots) -> GameController:
    return GameController(
        BoardConfig(9, 9, 10),
        rng=random.Random(99),
        listener=snapshots.append,
        ticker_factory=RecordingTicker,
    )


def find_mine(controller: GameController):
    for cell in controller.session.board.iter_cells():
        if cell.is_mine:
            return cell.row, cell.col
    raise AssertionError("no mine on board")


# ============================================================================
# Session Ownership Tests
# ============================================================================

class TestControllerSession:
    """Test that the controller swaps sessions and notifies."""

    def test_starts_idle(self, controller: GameController) -> None:
        """The first session is idle and the clock is off."""
        assert controller.session.status == GameStatus.IDLE
        assert controller.ticker.running is False

    def test_reveal_replaces_session(self, controller, snapshots) -> None:
        """A reveal installs the new session and notifies the listener."""
        before = controller.session
        after = controller.reveal(4, 4)
        assert controller.session is after
        assert after is not before
        assert snapshots == [after]

    def test_rejected_move_does_not_notify(self, controller, snapshots) -> None:
        """A rejected operation keeps the session and stays silent."""
        controller.reveal(4, 4)
        current = controller.session
        assert controller.reveal(4, 4) is current
        assert len(snapshots) == 1

    def test_toggle_flag(self, controller: GameController) -> None:
        """Flags go through the controller too."""
        controller.reveal(4, 4)
        if not controller.session.is_playing:
            pytest.skip("first reveal cleared the board")
        row, col = find_mine(controller)
        session = controller.toggle_flag(row, col)
        assert session.flags_remaining == 9


# ============================================================================
# Clock Wiring Tests
# ============================================================================

class TestControllerClock:
    """Test that the ticker follows the game status."""

    def test_first_reveal_starts_ticker(self, controller: GameController) -> None:
        """The clock starts with the game."""
        controller.reveal(4, 4)
        if controller.session.is_playing:
            assert controller.ticker.running is True
            assert controller.ticker.starts == 1

    def test_ticks_advance_clock(self, controller: GameController) -> None:
        """The ticker callback is the controller's tick."""
        controller.reveal(4, 4)
        controller.ticker.callback()
        controller.ticker.callback()
        if controller.session.is_playing:
            assert controller.session.elapsed_seconds == 2
        assert controller.ticker.starts == 1

    def test_loss_stops_ticker(self, controller: GameController) -> None:
        """Hitting a mine stops the clock."""
        controller.reveal(4, 4)
        if not controller.session.is_playing:
            pytest.skip("first reveal cleared the board")
        controller.reveal(*find_mine(controller))
        assert controller.session.status == GameStatus.LOST
        assert controller.ticker.running is False
        assert controller.ticker.stops == 1

    def test_reset_stops_ticker(self, controller: GameController) -> None:
        """Reset returns to idle with the clock off."""
        controller.reveal(4, 4)
        controller.tick()
        session = controller.reset()
        assert session.status == GameStatus.IDLE
        assert session.elapsed_seconds == 0
        assert controller.ticker.running is False

    def test_close_stops_ticker(self, controller: GameController) -> None:
        """close() always stops the clock."""
        controller.reveal(4, 4)
        controller.close()
        assert controller.ticker.running is False

    def test_clock_maximum_stops_ticker(self, controller: GameController) -> None:
        """The ticker stops once the clock reaches its maximum."""
        controller.reveal(4, 4)
        if not controller.session.is_playing:
            pytest.skip("first reveal cleared the board")
        for _ in range(999):
            controller.ticker.callback()
        assert controller.session.elapsed_seconds == 999
        assert controller.ticker.running is False
        assert controller.ticker.stops == 1


# ============================================================================
# Notification Order Tests
# ============================================================================

class TestControllerNotification:
    """Test that listeners see snapshots in replacement order."""

    def test_slow_listener_holds_back_next_move(self) -> None:
        """A move waits until the previous snapshot has been delivered."""
        snapshots = []
        entered = threading.Event()
        release = threading.Event()

        def listener(session):
            snapshots.append(session)
            if len(snapshots) == 2:
                entered.set()
                release.wait(timeout=5.0)

        controller = GameController(
            BoardConfig(9, 9, 10),
            rng=random.Random(99),
            listener=listener,
            ticker_factory=RecordingTicker,
        )
        controller.reveal(4, 4)
        if not controller.session.is_playing:
            pytest.skip("first reveal cleared the board")
        mine = find_mine(controller)

        ticking = threading.Thread(target=controller.tick)
        ticking.start()
        assert entered.wait(timeout=5.0)

        revealing = threading.Thread(target=controller.reveal, args=mine)
        revealing.start()
        revealing.join(timeout=0.1)
        assert revealing.is_alive()

        release.set()
        ticking.join(timeout=5.0)
        revealing.join(timeout=5.0)

        assert [s.status for s in snapshots[1:]] == [GameStatus.PLAYING, GameStatus.LOST]
        assert snapshots[-1] is controller.session

    def test_listener_can_read_session(self) -> None:
        """The listener may read the controller's session while notified."""
        seen = []
        controller = GameController(
            BoardConfig(9, 9, 10),
            rng=random.Random(99),
            listener=lambda session: seen.append(controller.session is session),
            ticker_factory=RecordingTicker,
        )
        controller.reveal(4, 4)
        assert seen == [True]
