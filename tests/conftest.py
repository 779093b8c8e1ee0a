"""
Pytest configuration and shared fixtures.
"""
import random
from dataclasses import replace
from typing import Callable

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameStatus, Session, on_reveal


# ============================================================================
# Random Source Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine placement."""
    return random.Random(1234)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def empty_board() -> Board:
    """A 5x5 board with no mines for cascade testing."""
    return Board.from_mines(5, 5, [])


@pytest.fixture
def corner_mine_board() -> Board:
    """
    A 4x4 board with a single mine in the top-left corner.

    Counts:
        * 1 0 0
        1 1 0 0
        0 0 0 0
        0 0 0 0
    """
    return Board.from_mines(4, 4, [(0, 0)])


@pytest.fixture
def wall_board() -> Board:
    """
    A 3x5 board whose middle column is a wall of mines.

    Counts:
        0 2 * 2 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return Board.from_mines(3, 5, [(0, 2), (1, 2), (2, 2)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def beginner_config() -> BoardConfig:
    """Beginner-size configuration: 9x9 with 10 mines."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def idle_session(beginner_config: BoardConfig) -> Session:
    """Fresh idle 9x9 session."""
    return Session.from_config(beginner_config)


@pytest.fixture
def playing_session(idle_session: Session, rng: random.Random) -> Session:
    """9x9 session after a seeded first reveal in the center."""
    return on_reveal(idle_session, 4, 4, rng)


@pytest.fixture
def start_game() -> Callable[[Board], Session]:
    """
    Factory for a playing session over a hand-built board.

    The session looks as if the first move had already placed the mines,
    with the clock running.
    """
    def _start(board: Board) -> Session:
        config = BoardConfig(board.rows, board.cols, board.mine_count)
        return replace(
            Session.from_config(config),
            board=board,
            status=GameStatus.PLAYING,
            first_move_done=True,
            timer_running=True,
        )

    return _start
