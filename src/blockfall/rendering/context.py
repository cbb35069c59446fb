"""Render-ready view of a snapshot, built without touching arcade."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from blockfall.components.game_state import GameState, GameStatus
from blockfall.components.tetromino import PieceType, shape_offsets
from blockfall.constants import CAUTION_ROWS, SPAWN_ROTATION
from blockfall.systems.board_ops import stack_top
from blockfall.systems.movement import ghost_piece
from blockfall.systems.scoring import drop_interval_for
from blockfall.ui.layout import compute_board_geometry

# (col, row, piece_type) in board coordinates, row 0 at the top.
CellEntry = Tuple[int, int, PieceType]


@dataclass(slots=True)
class RenderContext:
    rows: int
    cols: int
    cell_size: int
    board_left: float
    board_bottom: float
    panel_left: float
    locked: List[CellEntry] = field(default_factory=list)
    active: List[CellEntry] = field(default_factory=list)
    ghost: List[CellEntry] = field(default_factory=list)
    clearing_rows: Tuple[int, ...] = ()
    next_piece: Optional[PieceType] = None
    held_piece: Optional[PieceType] = None
    can_hold: bool = True
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    drop_interval_ms: int = 0
    status: GameStatus = GameStatus.READY
    caution: bool = False

    def cell_origin(self, col: int, row: int) -> Tuple[float, float]:
        """Bottom-left screen position of a board cell (arcade's y axis points up)."""
        x = self.board_left + col * self.cell_size
        y = self.board_bottom + (self.rows - 1 - row) * self.cell_size
        return x, y


def preview_cells(piece_type: PieceType) -> List[Tuple[int, int]]:
    return list(shape_offsets(piece_type, SPAWN_ROTATION))


def build_render_context(state: GameState, window_width: int, window_height: int) -> RenderContext:
    board = state.board
    cell_size, board_left, board_bottom, panel_left = compute_board_geometry(
        window_width, window_height, board.rows, board.cols
    )
    ctx = RenderContext(
        rows=board.rows,
        cols=board.cols,
        cell_size=cell_size,
        board_left=board_left,
        board_bottom=board_bottom,
        panel_left=panel_left,
        clearing_rows=state.clearing_lines,
        next_piece=state.next_piece,
        held_piece=state.held,
        can_hold=state.can_hold,
        score=state.score,
        level=state.level,
        lines_cleared=state.lines_cleared,
        drop_interval_ms=drop_interval_for(state.level),
        status=state.status,
        caution=stack_top(board) < CAUTION_ROWS,
    )
    for row_index, row in enumerate(board.cells):
        for col_index, cell in enumerate(row):
            if cell is not None:
                ctx.locked.append((col_index, row_index, cell))
    piece = state.active
    if piece is not None:
        ghost = ghost_piece(board, piece)
        if ghost is not None and ghost.y != piece.y:
            ctx.ghost = [(x, y, ghost.type) for x, y in ghost.cells() if y >= 0]
        ctx.active = [(x, y, piece.type) for x, y in piece.cells() if y >= 0]
    return ctx
