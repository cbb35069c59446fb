"""Pure transition function for the game state machine.

``reduce(state, action)`` never raises and never performs I/O. Actions that are
not legal for the current status hand back the very same state object, so
callers can detect a no-op with an identity check. ``is_valid_action`` is the
predicate input adapters and the drop scheduler consult before dispatching.
"""
from __future__ import annotations

import random
from dataclasses import replace
from typing import Callable, Dict

from blockfall.components.actions import Action, ActionType
from blockfall.components.board import Board
from blockfall.components.game_state import GameState, GameStatus, LastAction, create_initial_state
from blockfall.components.tetromino import ActivePiece, PieceType
from blockfall.constants import SPAWN_ROTATION, SPAWN_Y
from blockfall.systems.board_ops import clear_lines, find_full_lines, lock_piece
from blockfall.systems.movement import (
    CLOCKWISE,
    COUNTER_CLOCKWISE,
    can_place,
    hard_drop_distance,
    try_move,
    try_rotate,
)
from blockfall.systems.scoring import DropKind, level_for, score_for_clear, score_for_drop

_PIECE_ACTIONS = frozenset(
    {
        ActionType.MOVE_LEFT,
        ActionType.MOVE_RIGHT,
        ActionType.MOVE_DOWN,
        ActionType.ROTATE,
        ActionType.HARD_DROP,
        ActionType.LOCK_PIECE,
    }
)


def spawn_piece_for(board: Board, piece_type: PieceType) -> ActivePiece:
    return ActivePiece(type=piece_type, rotation=SPAWN_ROTATION, x=board.cols // 2 - 2, y=SPAWN_Y)


def lines_pending(state: GameState) -> int:
    """Full rows still on the board awaiting ``CLEAR_LINES``."""
    return len(find_full_lines(state.board))


def is_valid_action(state: GameState, action: Action) -> bool:
    kind = action.type
    status = state.status
    playing = status is GameStatus.PLAYING
    if kind in _PIECE_ACTIONS:
        return playing and state.active is not None
    if kind is ActionType.HOLD_PIECE:
        return playing and state.active is not None and not state.hold_locked
    if kind is ActionType.START_GAME:
        return status is GameStatus.READY
    if kind is ActionType.PAUSE_GAME:
        return playing
    if kind is ActionType.RESUME_GAME:
        return status is GameStatus.PAUSED
    if kind is ActionType.RESTART_GAME:
        return True
    if kind is ActionType.GAME_TICK:
        return playing
    if kind is ActionType.SPAWN_PIECE:
        return playing and state.active is None and lines_pending(state) == 0
    if kind is ActionType.CLEAR_LINES:
        return playing and action.line_count > 0 and lines_pending(state) == action.line_count
    return False


def reduce(state: GameState, action: Action) -> GameState:
    if not is_valid_action(state, action):
        return state
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return state
    return handler(state, action)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

def _game_over(state: GameState) -> GameState:
    return replace(state, active=None, status=GameStatus.GAME_OVER)


def _spawn_next(state: GameState) -> GameState:
    piece_type, queue = state.queue.draw()
    piece = spawn_piece_for(state.board, piece_type)
    if not can_place(state.board, piece):
        return _game_over(state)
    return replace(state, active=piece, queue=queue, status=GameStatus.PLAYING, last_action=None)


def _next_spawn_blocked(board: Board, state: GameState) -> bool:
    return not can_place(board, spawn_piece_for(board, state.queue.peek()))


def _lock_active(state: GameState, last_action: LastAction | None) -> GameState:
    """Write the active piece, score any full rows and mark them for the clear phase."""
    board = lock_piece(state.board, state.active)
    full = find_full_lines(board)
    count = len(full)
    lines = state.lines_cleared + count
    locked = replace(
        state,
        board=board,
        active=None,
        hold_locked=False,
        score=state.score + score_for_clear(count, state.level),
        lines_cleared=lines,
        level=max(state.level, level_for(lines)),
        pieces_placed=state.pieces_placed + 1,
        last_action=last_action,
        clearing_lines=tuple(full),
        is_animating=count > 0,
    )
    if count == 0 and _next_spawn_blocked(board, locked):
        return _game_over(locked)
    return locked


# ----------------------------------------------------------------------
# Action handlers
# ----------------------------------------------------------------------

def _on_start(state: GameState, action: Action) -> GameState:
    return _spawn_next(replace(state, status=GameStatus.PLAYING))


def _shift(dx: int) -> Callable[[GameState, Action], GameState]:
    def handler(state: GameState, action: Action) -> GameState:
        piece, moved = try_move(state.board, state.active, dx, 0)
        if not moved:
            return state
        return replace(state, active=piece, last_action=LastAction.MOVE)
    return handler


def _on_move_down(state: GameState, action: Action) -> GameState:
    piece, moved = try_move(state.board, state.active, 0, 1)
    if not moved:
        return state
    return replace(
        state,
        active=piece,
        score=state.score + score_for_drop(1, DropKind.SOFT),
        last_action=LastAction.DROP,
    )


def _on_rotate(state: GameState, action: Action) -> GameState:
    direction = CLOCKWISE if action.clockwise else COUNTER_CLOCKWISE
    piece, rotated = try_rotate(state.board, state.active, direction)
    if not rotated:
        return state
    return replace(state, active=piece, last_action=LastAction.ROTATE)


def _on_hard_drop(state: GameState, action: Action) -> GameState:
    distance = hard_drop_distance(state.board, state.active)
    landed = state.active.translated(0, distance)
    dropped = replace(
        state,
        active=landed,
        score=state.score + score_for_drop(distance, DropKind.HARD),
    )
    return _lock_active(dropped, LastAction.HARD_DROP)


def _on_hold(state: GameState, action: Action) -> GameState:
    current_type = state.active.type
    if state.held is None:
        incoming, queue = state.queue.draw()
    else:
        incoming, queue = state.held, state.queue
    piece = spawn_piece_for(state.board, incoming)
    swapped = replace(
        state,
        held=current_type,
        hold_locked=True,
        queue=queue,
        last_action=LastAction.HOLD,
    )
    if not can_place(state.board, piece):
        return _game_over(swapped)
    return replace(swapped, active=piece)


def _on_pause(state: GameState, action: Action) -> GameState:
    return replace(state, status=GameStatus.PAUSED)


def _on_resume(state: GameState, action: Action) -> GameState:
    return replace(state, status=GameStatus.PLAYING)


def _on_restart(state: GameState, action: Action) -> GameState:
    # Derive the next seed from the current one so the reducer stays deterministic.
    seed = random.Random(f"{state.queue.seed}:restart").getrandbits(64)
    return create_initial_state(seed=seed, rows=state.board.rows, cols=state.board.cols)


def _on_lock(state: GameState, action: Action) -> GameState:
    return _lock_active(state, None)


def _on_spawn(state: GameState, action: Action) -> GameState:
    return _spawn_next(state)


def _on_tick(state: GameState, action: Action) -> GameState:
    return state


def _on_clear_lines(state: GameState, action: Action) -> GameState:
    board = clear_lines(state.board, find_full_lines(state.board))
    cleared = replace(state, board=board, clearing_lines=(), is_animating=False)
    if _next_spawn_blocked(board, cleared):
        return _game_over(cleared)
    return cleared


_HANDLERS: Dict[ActionType, Callable[[GameState, Action], GameState]] = {
    ActionType.START_GAME: _on_start,
    ActionType.MOVE_LEFT: _shift(-1),
    ActionType.MOVE_RIGHT: _shift(1),
    ActionType.MOVE_DOWN: _on_move_down,
    ActionType.ROTATE: _on_rotate,
    ActionType.HARD_DROP: _on_hard_drop,
    ActionType.HOLD_PIECE: _on_hold,
    ActionType.PAUSE_GAME: _on_pause,
    ActionType.RESUME_GAME: _on_resume,
    ActionType.RESTART_GAME: _on_restart,
    ActionType.LOCK_PIECE: _on_lock,
    ActionType.SPAWN_PIECE: _on_spawn,
    ActionType.GAME_TICK: _on_tick,
    ActionType.CLEAR_LINES: _on_clear_lines,
}
