"""
Game session module for Minesweeper.

Wraps a Board with the state that spans moves: game status, first-move
deferral, the flag counter and the elapsed-time clock. Sessions are
immutable; each operation returns the next session, or the same object
when the operation is rejected.
"""
import logging
import random
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional

from .board import (
    Board,
    BoardConfig,
    count_flags,
    generate,
    is_cleared,
    reveal,
    reveal_all_mines,
    toggle_flag,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MAX_ELAPSED_SECONDS = 999


class GameStatus(Enum):
    """Possible states of the game."""

    IDLE = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Session Snapshot
# ============================================================================

@dataclass(frozen=True)
class Session:
    """
    Snapshot of a game in progress.

    Attributes:
        config: Board dimensions and mine count.
        board: Current board snapshot, owned by this session.
        status: Current game status.
        flags_remaining: Mines minus placed flags, never negative.
        first_move_done: Whether mines have been placed.
        elapsed_seconds: Whole seconds played, capped at
            MAX_ELAPSED_SECONDS.
        timer_running: Whether tick() advances the clock.
    """

    config: BoardConfig
    board: Board
    status: GameStatus = GameStatus.IDLE
    flags_remaining: int = 0
    first_move_done: bool = False
    elapsed_seconds: int = 0
    timer_running: bool = False

    @classmethod
    def from_config(cls, config: BoardConfig) -> "Session":
        """Create an idle session with an unmined, hidden board."""
        return cls(
            config=config,
            board=Board.empty(config.rows, config.cols, config.num_mines),
            flags_remaining=config.num_mines,
        )

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        return self.status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        return self.status == GameStatus.LOST

    @property
    def is_over(self) -> bool:
        """Check if the game reached a terminal status."""
        return self.status in (GameStatus.WON, GameStatus.LOST)


# ============================================================================
# Session Operations
# ============================================================================

def new_session(rows: int, cols: int, mine_count: int) -> Session:
    """
    Create a new idle session.

    Raises:
        ConfigurationError: If the dimensions or mine count are invalid.
    """
    return Session.from_config(BoardConfig(rows, cols, mine_count))


def on_reveal(
    session: Session,
    row: int,
    col: int,
    rng: Optional[random.Random] = None,
) -> Session:
    """
    Reveal a cell.

    The first reveal places mines around the chosen cell and starts the
    clock. Hitting a mine reveals all mines and loses; clearing every
    safe cell wins. Both stop the clock.

    Args:
        session: Current session.
        row: Row index to reveal.
        col: Column index to reveal.
        rng: Random source for mine placement on the first reveal.

    Returns:
        Next session, or ``session`` itself if the game is over or the
        cell is flagged or already revealed.
    """
    if session.is_over:
        logger.debug("Reveal (%d, %d) ignored: game is %s", row, col, session.status.name)
        return session

    cell = session.board.get_cell(row, col)
    if cell.is_revealed or cell.is_flagged:
        return session

    board = session.board
    if not session.first_move_done:
        config = session.config
        # Flags placed while idle do not survive mine placement
        board = generate(config.rows, config.cols, config.num_mines, (row, col), rng)
        session = start_timer(replace(
            session,
            status=GameStatus.PLAYING,
            first_move_done=True,
        ))
        logger.debug("Mines placed around (%d, %d)", row, col)

    board = reveal(board, row, col)

    if board.get_cell(row, col).is_mine:
        logger.debug("Mine hit at (%d, %d)", row, col)
        return stop_timer(replace(
            session,
            board=reveal_all_mines(board),
            status=GameStatus.LOST,
            flags_remaining=_flags_remaining(board),
        ))

    next_session = replace(
        session,
        board=board,
        flags_remaining=_flags_remaining(board),
    )
    if is_cleared(board):
        logger.debug("Board cleared in %d seconds", next_session.elapsed_seconds)
        next_session = stop_timer(replace(next_session, status=GameStatus.WON))
    return next_session


def on_toggle_flag(session: Session, row: int, col: int) -> Session:
    """
    Toggle a flag, honoring the flag budget.

    Returns:
        Next session, or ``session`` itself if the game is over, the cell
        is revealed, or no flags remain.
    """
    if session.is_over:
        logger.debug("Flag (%d, %d) ignored: game is %s", row, col, session.status.name)
        return session

    board = toggle_flag(session.board, row, col)
    if board is session.board:
        return session
    return replace(session, board=board, flags_remaining=_flags_remaining(board))


def reset(session: Session) -> Session:
    """Start over with a fresh idle board of the same configuration."""
    return Session.from_config(session.config)


def tick(session: Session) -> Session:
    """
    Advance the clock by one second.

    No-op unless the game is playing with the clock running. The tick
    that reaches MAX_ELAPSED_SECONDS also stops the clock.
    """
    if not (session.is_playing and session.timer_running):
        return session
    if session.elapsed_seconds >= MAX_ELAPSED_SECONDS:
        return stop_timer(session)
    elapsed = session.elapsed_seconds + 1
    return replace(
        session,
        elapsed_seconds=elapsed,
        timer_running=elapsed < MAX_ELAPSED_SECONDS,
    )


def start_timer(session: Session) -> Session:
    """Let tick() advance the clock while playing."""
    if session.timer_running or not session.is_playing:
        return session
    return replace(session, timer_running=True)


def stop_timer(session: Session) -> Session:
    """Freeze the clock at its current value."""
    if not session.timer_running:
        return session
    return replace(session, timer_running=False)


# ============================================================================
# Helpers
# ============================================================================

def _flags_remaining(board: Board) -> int:
    return max(board.mine_count - count_flags(board), 0)
