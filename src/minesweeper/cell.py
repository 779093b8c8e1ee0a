"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their position,
content (mine/number) and state (hidden/revealed/flagged). Cells are
immutable; changing one produces a new Cell.
"""
from enum import Enum, auto
from dataclasses import dataclass, replace


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_OBSERVATION = -1
FLAGGED_OBSERVATION = -2
MINE_OBSERVATION = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index (0-based).
        col: Column index (0-based).
        is_mine: Whether this cell contains a mine.
        is_revealed: Whether the cell has been uncovered.
        is_flagged: Whether the player has marked the cell. Ignored once
            the cell is revealed.
        adjacent_mines: Count of mines in neighboring cells (0-8).
            Computed for mine cells too, but meaningless there.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0

    def revealed(self) -> "Cell":
        """
        Return a revealed copy of this cell.

        Any flag is dropped so a revealed cell is never flagged.
        """
        return replace(self, is_revealed=True, is_flagged=False)

    def with_flag(self, flagged: bool) -> "Cell":
        """Return a copy with the flag set or cleared."""
        return replace(self, is_flagged=flagged)

    @property
    def state(self) -> CellState:
        """Current visual state derived from the flags."""
        if self.is_revealed:
            return CellState.REVEALED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return self.state == CellState.HIDDEN

    @property
    def position(self):
        return self.row, self.col

    def to_observation(self) -> int:
        """
        Convert cell to an integer observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.is_revealed:
            if self.is_mine:
                return MINE_OBSERVATION
            return self.adjacent_mines
        if self.is_flagged:
            return FLAGGED_OBSERVATION
        return HIDDEN_OBSERVATION
