from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from blockfall.components.actions import Action, ActionType
from blockfall.components.board import Board
from blockfall.components.game_state import GameState, GameStatus, create_initial_state
from blockfall.components.tetromino import ActivePiece, PieceType
from blockfall.events.bus import EventBus
from blockfall.systems.board_ops import board_from_rows
from blockfall.systems.game_session_system import GameSessionSystem
from blockfall.world import create_world

SEED = 1234


def board_from_strings(rows: Sequence[str], fill: PieceType = PieceType.O) -> Board:
    """Build a board from strings; '.' is empty, a piece letter locks that type, '#' locks ``fill``."""
    parsed = []
    for row in rows:
        cells = []
        for ch in row:
            if ch == '.':
                cells.append(None)
            elif ch == '#':
                cells.append(fill)
            else:
                cells.append(PieceType(ch))
        parsed.append(cells)
    return board_from_rows(parsed)


def empty_rows(count: int, cols: int = 10) -> list[str]:
    return ['.' * cols for _ in range(count)]


def playing_state(
    board: Board | None = None,
    active: ActivePiece | None = None,
    *,
    seed: int = SEED,
    **overrides,
) -> GameState:
    """A ``PLAYING`` snapshot with the given board and active piece."""
    state = create_initial_state(seed=seed)
    if board is not None:
        state = replace(state, board=board)
    return replace(state, active=active, status=GameStatus.PLAYING, **overrides)


def start_session(seed: int = SEED, **world_kwargs):
    """World, bus and session system with a started game."""
    bus = EventBus()
    world = create_world(bus, seed=seed, **world_kwargs)
    session = GameSessionSystem(world, bus)
    session.dispatch(Action.of(ActionType.START_GAME))
    return bus, world, session
