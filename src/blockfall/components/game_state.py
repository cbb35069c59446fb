"""Authoritative game snapshot and its status enumeration."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from blockfall.components.board import Board
from blockfall.components.piece_queue import PieceQueue
from blockfall.components.tetromino import ActivePiece, PieceType
from blockfall.constants import BOARD_COLS, BOARD_ROWS
from blockfall.systems.board_ops import create_empty_board


class GameStatus(Enum):
    """Exactly one status holds at any time."""
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


class LastAction(Enum):
    """Advisory hint for animation observers; never consulted by game rules."""
    MOVE = "move"
    ROTATE = "rotate"
    DROP = "drop"
    HARD_DROP = "hard_drop"
    HOLD = "hold"


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot; every transition produces a new instance.

    ``last_action``, ``clearing_lines`` and ``is_animating`` describe the most
    recent transition for renderers and are output only.
    """
    board: Board
    queue: PieceQueue
    active: Optional[ActivePiece] = None
    held: Optional[PieceType] = None
    hold_locked: bool = False
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    pieces_placed: int = 0
    status: GameStatus = GameStatus.READY
    last_action: Optional[LastAction] = None
    clearing_lines: Tuple[int, ...] = ()
    is_animating: bool = False

    @property
    def next_piece(self) -> PieceType:
        return self.queue.peek()

    @property
    def can_hold(self) -> bool:
        return not self.hold_locked

    @property
    def final_result(self) -> Tuple[int, int, int]:
        """``(score, level, lines_cleared)`` handed to persistence on game over."""
        return self.score, self.level, self.lines_cleared


def create_initial_state(
    *,
    seed: int | None = None,
    rows: int = BOARD_ROWS,
    cols: int = BOARD_COLS,
) -> GameState:
    """Fresh ``READY`` state with an empty board and a primed queue."""
    return GameState(board=create_empty_board(rows, cols), queue=PieceQueue.create(seed))
