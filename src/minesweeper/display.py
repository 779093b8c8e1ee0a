"""
Text helpers shared by front-ends.

Everything here is a pure function of a Cell, Board or Session.
"""
from typing import List

from .board import Board
from .cell import Cell
from .session import MAX_ELAPSED_SECONDS, GameStatus, Session

FLAG_GLYPH = "F"
MINE_GLYPH = "*"


def cell_glyph(cell: Cell) -> str:
    """
    Glyph for a cell.

    Returns:
        "" for a hidden cell, "F" for a flag, "*" for a revealed mine,
        the adjacent count for a revealed safe cell ("" when zero).
    """
    if not cell.is_revealed:
        return FLAG_GLYPH if cell.is_flagged else ""
    if cell.is_mine:
        return MINE_GLYPH
    return str(cell.adjacent_mines) if cell.adjacent_mines else ""


def format_counter(value: int) -> str:
    """Three-digit counter text, clamped to 000-999."""
    clamped = min(max(value, 0), MAX_ELAPSED_SECONDS)
    return f"{clamped:03d}"


def face_label(session: Session) -> str:
    """Face shown on the reset button."""
    if session.status == GameStatus.WON:
        return ":D"
    if session.status == GameStatus.LOST:
        return "X("
    if session.first_move_done:
        return ":/"
    return ":)"


def status_message(session: Session) -> str:
    """One-line hint for the status bar."""
    if session.status == GameStatus.WON:
        return "You cleared the field!"
    if session.status == GameStatus.LOST:
        return "Boom! Try again."
    if not session.first_move_done:
        return "Reveal a cell to start, flag the ones you suspect."
    return "Careful out there..."


def render_board(board: Board, hidden: str = ".") -> str:
    """
    Render the board as plain text, one line per row.

    Args:
        board: Board to draw.
        hidden: Placeholder for hidden cells.
    """
    lines = []
    for row in board.rows_of_cells():
        row_str = ""
        for cell in row:
            glyph = cell_glyph(cell)
            if not cell.is_revealed and not cell.is_flagged:
                glyph = hidden
            row_str += (glyph or " ") + " "
        lines.append(row_str.rstrip())
    return "\n".join(lines)


def render_session(session: Session) -> str:
    """Render counters, face, column/row labels and the board."""
    board = session.board
    width = max(len(str(board.rows - 1)), 1)
    header = (
        f"{format_counter(session.flags_remaining)}  "
        f"{face_label(session)}  "
        f"{format_counter(session.elapsed_seconds)}"
    )

    lines: List[str] = [header, ""]
    lines.append(" " * (width + 1) + " ".join(str(col % 10) for col in range(board.cols)))
    for row, text in enumerate(render_board(board).split("\n")):
        lines.append(f"{row:>{width}} {text}")
    lines.append("")
    lines.append(status_message(session))
    return "\n".join(lines)
