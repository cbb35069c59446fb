"""Collision checks and piece movement against a board.

Every function here is pure: a rejected move hands back the original piece
object, never an error.
"""
from __future__ import annotations

from typing import Optional, Tuple

from blockfall.components.board import Board
from blockfall.components.tetromino import ActivePiece
from blockfall.systems.board_ops import is_cell_free

CLOCKWISE = 1
COUNTER_CLOCKWISE = -1


def can_place(board: Board, piece: ActivePiece) -> bool:
    """True iff every occupied cell is inside the side walls, above the floor and free.

    Cells above row 0 are allowed so a freshly spawned piece may overhang the top.
    """
    for x, y in piece.cells():
        if x < 0 or x >= board.cols or y >= board.rows:
            return False
        if y < 0:
            continue
        if not is_cell_free(board, x, y):
            return False
    return True


def can_move(board: Board, piece: ActivePiece, dx: int, dy: int) -> bool:
    return can_place(board, piece.translated(dx, dy))


def try_move(board: Board, piece: ActivePiece, dx: int, dy: int) -> Tuple[ActivePiece, bool]:
    """Translate the piece; returns ``(piece, moved)`` with the original piece on rejection."""
    candidate = piece.translated(dx, dy)
    if can_place(board, candidate):
        return candidate, True
    return piece, False


def try_rotate(board: Board, piece: ActivePiece, direction: int = CLOCKWISE) -> Tuple[ActivePiece, bool]:
    """Rotate in place. No kick offsets are tried; a blocked rotation is rejected."""
    step = CLOCKWISE if direction >= 0 else COUNTER_CLOCKWISE
    candidate = piece.rotated(step)
    if can_place(board, candidate):
        return candidate, True
    return piece, False


def find_hard_drop_position(board: Board, piece: ActivePiece) -> ActivePiece:
    """Lowest reachable position straight below ``piece``.

    Terminates within ``board.rows`` steps plus the spawn overhang since every
    accepted move increases y and the floor rejects anything past the last row.
    """
    current = piece
    while True:
        moved_piece, moved = try_move(board, current, 0, 1)
        if not moved:
            return current
        current = moved_piece


def hard_drop_distance(board: Board, piece: ActivePiece) -> int:
    return find_hard_drop_position(board, piece).y - piece.y


def ghost_piece(board: Board, piece: Optional[ActivePiece]) -> Optional[ActivePiece]:
    """Landing preview for the renderer; ``None`` when there is no active piece."""
    if piece is None:
        return None
    return find_hard_drop_position(board, piece)


def should_lock(board: Board, piece: ActivePiece) -> bool:
    """True when the piece rests on the floor or the stack."""
    return not can_move(board, piece, 0, 1)


def can_piece_move_anywhere(board: Board, piece: ActivePiece) -> bool:
    return (
        can_move(board, piece, -1, 0)
        or can_move(board, piece, 1, 0)
        or can_move(board, piece, 0, 1)
        or try_rotate(board, piece, CLOCKWISE)[1]
        or try_rotate(board, piece, COUNTER_CLOCKWISE)[1]
    )
