from __future__ import annotations

from typing import Iterable, List, Sequence

from blockfall.components.board import Board, CellValue, Row
from blockfall.components.tetromino import ActivePiece
from blockfall.constants import BOARD_COLS, BOARD_ROWS


def _empty_row(cols: int) -> Row:
    return (None,) * cols


def create_empty_board(rows: int = BOARD_ROWS, cols: int = BOARD_COLS) -> Board:
    if rows <= 0 or cols <= 0:
        raise ValueError("Board dimensions must be positive")
    return Board(cells=tuple(_empty_row(cols) for _ in range(rows)))


def board_from_rows(rows: Sequence[Sequence[CellValue]]) -> Board:
    """Build a board from nested sequences, checking that every row has the same width."""
    frozen = tuple(tuple(row) for row in rows)
    if not frozen or not frozen[0]:
        raise ValueError("Board must have at least one row and one column")
    width = len(frozen[0])
    if any(len(row) != width for row in frozen):
        raise ValueError("Every board row must have the same width")
    return Board(cells=frozen)


def is_cell_free(board: Board, x: int, y: int) -> bool:
    """True iff (x, y) lies on the board and is empty. Off-board cells count as occupied."""
    if not board.in_bounds(x, y):
        return False
    return board.get(x, y) is None


def lock_piece(board: Board, piece: ActivePiece) -> Board:
    """Write the piece into a copy of the board; cells above row 0 are dropped."""
    grid: List[List[CellValue]] = [list(row) for row in board.cells]
    for x, y in piece.cells():
        if board.in_bounds(x, y):
            grid[y][x] = piece.type
    return Board(cells=tuple(tuple(row) for row in grid))


def is_row_full(row: Row) -> bool:
    return all(cell is not None for cell in row)


def find_full_lines(board: Board) -> List[int]:
    """Indices of completely filled rows, ascending."""
    return [index for index, row in enumerate(board.cells) if is_row_full(row)]


def clear_lines(board: Board, row_indices: Iterable[int]) -> Board:
    """Remove the given rows; rows above fall down and empty rows fill the top."""
    doomed = {index for index in row_indices if 0 <= index < board.rows}
    if not doomed:
        return board
    kept = [row for index, row in enumerate(board.cells) if index not in doomed]
    padding = [_empty_row(board.cols) for _ in range(len(doomed))]
    return Board(cells=tuple(padding + kept))


def column_heights(board: Board) -> List[int]:
    """Row index of each column's topmost occupied cell, or the board height when empty."""
    heights: List[int] = []
    for col in range(board.cols):
        top = board.rows
        for row in range(board.rows):
            if board.cells[row][col] is not None:
                top = row
                break
        heights.append(top)
    return heights


def stack_top(board: Board) -> int:
    """Smallest value of :func:`column_heights`; ``board.rows`` for an empty board."""
    heights = column_heights(board)
    return min(heights) if heights else board.rows
