"""
Minesweeper game module.

Provides the board engine, the game session state machine and the pieces
front-ends need to drive them.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    ConfigurationError,
    DEFAULT_CONFIG,
    InvalidPositionError,
    count_flags,
    count_mines,
    count_revealed_safe_cells,
    generate,
    is_cleared,
    reveal,
    reveal_all_mines,
    toggle_flag,
)
from .session import (
    MAX_ELAPSED_SECONDS,
    GameStatus,
    Session,
    new_session,
    on_reveal,
    on_toggle_flag,
    reset,
    start_timer,
    stop_timer,
    tick,
)
from .timer import Ticker
from .controller import GameController
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "InvalidPositionError",
    "count_flags",
    "count_mines",
    "count_revealed_safe_cells",
    "generate",
    "is_cleared",
    "reveal",
    "reveal_all_mines",
    "toggle_flag",
    "MAX_ELAPSED_SECONDS",
    "GameStatus",
    "Session",
    "new_session",
    "on_reveal",
    "on_toggle_flag",
    "reset",
    "start_timer",
    "stop_timer",
    "tick",
    "Ticker",
    "GameController",
    "MinesweeperEnv",
]
