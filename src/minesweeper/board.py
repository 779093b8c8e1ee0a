"""
Board module for Minesweeper game.

Implements the board engine: deferred mine placement around a safe cell,
flood-fill revealing and the flag budget. A Board is an immutable
snapshot; every operation returns a new Board and leaves its input intact.
"""
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Errors
# ============================================================================

class ConfigurationError(ValueError):
    """Raised when board dimensions or mine count cannot form a game."""


class InvalidPositionError(IndexError):
    """Raised when a (row, col) lies outside the board."""


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        # The first revealed cell is always safe; at least one more safe
        # cell must remain or the game is decided by the first move.
        max_mines = max(self.total_cells - 2, 0)
        if self.num_mines > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.num_mines


DEFAULT_CONFIG = BoardConfig(9, 9, 10)


# ============================================================================
# Board Snapshot
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Immutable Minesweeper board.

    Cells are stored in a flat tuple indexed by ``row * cols + col``.
    """

    rows: int
    cols: int
    mine_count: int
    cells: Tuple[Cell, ...] = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.cells) != self.rows * self.cols:
            raise ValueError(
                f"Expected {self.rows * self.cols} cells, got {len(self.cells)}"
            )

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def empty(cls, rows: int, cols: int, mine_count: int) -> "Board":
        """Create an unmined, fully hidden board."""
        cells = tuple(
            Cell(row=row, col=col)
            for row in range(rows)
            for col in range(cols)
        )
        return cls(rows, cols, mine_count, cells)

    @classmethod
    def from_mines(
        cls,
        rows: int,
        cols: int,
        mines: Iterable[Position],
        mine_count: Optional[int] = None,
    ) -> "Board":
        """
        Build a hidden board with mines at the given positions.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mines: (row, col) positions holding a mine.
            mine_count: Declared mine count. Defaults to the number of
                positions given.

        Returns:
            Board with adjacent mine counts computed for every cell.
        """
        mine_set = set(mines)
        layout = cls.empty(rows, cols, 0)
        for row, col in mine_set:
            layout._check_position(row, col)

        cells = []
        for row in range(rows):
            for col in range(cols):
                count = sum(
                    1 for neighbor in layout.neighbors(row, col)
                    if neighbor in mine_set
                )
                cells.append(Cell(
                    row=row,
                    col=col,
                    is_mine=(row, col) in mine_set,
                    adjacent_mines=count,
                ))

        if mine_count is None:
            mine_count = len(mine_set)
        return cls(rows, cols, mine_count, tuple(cells))

    # ========================================================================
    # Positions and Neighbors (Low-level)
    # ========================================================================

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_position(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise InvalidPositionError(
                f"({row}, {col}) is outside a {self.rows}x{self.cols} board"
            )

    def index(self, row: int, col: int) -> int:
        """Flat index of a position."""
        return row * self.cols + col

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up-to-8 in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    # ========================================================================
    # Accessors
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position, raising InvalidPositionError if invalid."""
        self._check_position(row, col)
        return self.cells[self.index(row, col)]

    def iter_cells(self) -> Iterator[Cell]:
        """Iterate cells in row-major order."""
        return iter(self.cells)

    def rows_of_cells(self) -> List[Tuple[Cell, ...]]:
        """Cells grouped by row, for rendering."""
        return [
            self.cells[row * self.cols:(row + 1) * self.cols]
            for row in range(self.rows)
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.fromiter(
            (cell.to_observation() for cell in self.cells),
            dtype=np.int8,
            count=len(self.cells),
        )
        return obs.reshape(self.rows, self.cols)

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        return [cell.position for cell in self.cells if cell.is_hidden]

    def _with_cells(self, updates: Dict[int, Cell]) -> "Board":
        """Copy of this board with some cells replaced."""
        cells = list(self.cells)
        for idx, cell in updates.items():
            cells[idx] = cell
        return replace(self, cells=tuple(cells))


# ============================================================================
# Engine Operations
# ============================================================================

def generate(
    rows: int,
    cols: int,
    mine_count: int,
    safe_cell: Position,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Generate a board whose mines avoid ``safe_cell``.

    Every other cell is shuffled (Fisher-Yates via ``Random.shuffle``) and
    the first ``mine_count`` become mines. If fewer cells are available
    than requested, all of them are mined.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Mines to place.
        safe_cell: (row, col) that must stay mine-free.
        rng: Random source; a freshly seeded generator when omitted.

    Returns:
        Fully hidden, unflagged Board.
    """
    safe_cell = tuple(safe_cell)
    Board.empty(rows, cols, mine_count)._check_position(*safe_cell)
    rng = rng or random.Random()

    positions = [
        (row, col)
        for row in range(rows)
        for col in range(cols)
        if (row, col) != safe_cell
    ]
    rng.shuffle(positions)
    mines = positions[:mine_count]
    if len(mines) < mine_count:
        logger.debug(
            "Only %d of %d requested mines fit on a %dx%d board",
            len(mines), mine_count, rows, cols,
        )
    return Board.from_mines(rows, cols, mines, mine_count=mine_count)


def reveal(board: Board, row: int, col: int) -> Board:
    """
    Reveal a cell, flooding outward from zero-adjacency cells.

    A mine is revealed alone. A safe cell is revealed and, if it touches
    no mines, its hidden non-mine neighbors are revealed in turn using an
    explicit stack. Flagged cells are never revealed and stop the flood.

    Returns:
        A new Board, or ``board`` itself if the cell is already revealed
        or flagged.
    """
    target = board.get_cell(row, col)
    if target.is_revealed or target.is_flagged:
        return board

    updates: Dict[int, Cell] = {}
    stack = [(row, col)]
    while stack:
        current_row, current_col = stack.pop()
        idx = board.index(current_row, current_col)
        cell = updates.get(idx, board.cells[idx])
        if cell.is_revealed or cell.is_flagged:
            continue

        updates[idx] = cell.revealed()
        if cell.is_mine or cell.adjacent_mines != 0:
            continue

        for neighbor_row, neighbor_col in board.neighbors(current_row, current_col):
            neighbor_idx = board.index(neighbor_row, neighbor_col)
            neighbor = updates.get(neighbor_idx, board.cells[neighbor_idx])
            if not (neighbor.is_revealed or neighbor.is_flagged or neighbor.is_mine):
                stack.append((neighbor_row, neighbor_col))

    return board._with_cells(updates)


def reveal_all_mines(board: Board) -> Board:
    """
    Reveal every mine for the end-of-game display.

    Flags are left as they are; a revealed cell displays as revealed
    whether or not it also carries a flag.
    """
    updates = {
        board.index(cell.row, cell.col): replace(cell, is_revealed=True)
        for cell in board.cells
        if cell.is_mine and not cell.is_revealed
    }
    return board._with_cells(updates)


def toggle_flag(board: Board, row: int, col: int) -> Board:
    """
    Toggle the flag on a hidden cell, within the flag budget.

    An unflagged cell is flagged only while fewer than ``mine_count``
    flags are placed. Whether the cell is actually a mine does not matter.

    Returns:
        A new Board, or ``board`` itself if the cell is revealed or the
        budget is exhausted.
    """
    cell = board.get_cell(row, col)
    if cell.is_revealed:
        return board

    if cell.is_flagged:
        flagged = False
    elif count_flags(board) < board.mine_count:
        flagged = True
    else:
        return board

    return board._with_cells({board.index(row, col): cell.with_flag(flagged)})


# ============================================================================
# Queries
# ============================================================================

def count_flags(board: Board) -> int:
    """Number of flagged cells."""
    return sum(1 for cell in board.cells if cell.is_flagged)


def count_mines(board: Board) -> int:
    """Number of cells actually holding a mine."""
    return sum(1 for cell in board.cells if cell.is_mine)


def count_revealed_safe_cells(board: Board) -> int:
    """Number of revealed cells without a mine."""
    return sum(
        1 for cell in board.cells
        if cell.is_revealed and not cell.is_mine
    )


def is_cleared(board: Board) -> bool:
    """Check if all non-mine cells are revealed."""
    safe_cells = board.rows * board.cols - board.mine_count
    return count_revealed_safe_cells(board) == safe_cells
