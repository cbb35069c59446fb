"""Translate a pair of snapshots into observer events.

Audio, accessibility and persistence layers never hook into the reducer; the
session runs this diff after every applied action and emits the result on the
bus.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from blockfall.components.game_state import GameState, GameStatus, LastAction
from blockfall.events.bus import (
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_LINES_CLEARED,
    EVENT_LINES_MARKED,
    EVENT_PIECE_HELD,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_SPAWNED,
    EVENT_SCORE_CHANGED,
    EVENT_STATUS_CHANGED,
)
from blockfall.systems.scoring import drop_interval_for, line_clear_name

StateEvent = Tuple[str, Dict[str, Any]]


def collect_state_events(previous: GameState, current: GameState) -> List[StateEvent]:
    if previous is current:
        return []
    events: List[StateEvent] = []

    locked = current.pieces_placed == previous.pieces_placed + 1
    if locked and previous.active is not None:
        events.append((EVENT_PIECE_LOCKED, {
            "piece_type": previous.active.type,
            "hard_drop": current.last_action is LastAction.HARD_DROP,
            "pieces_placed": current.pieces_placed,
        }))

    if current.clearing_lines and current.clearing_lines != previous.clearing_lines:
        count = len(current.clearing_lines)
        events.append((EVENT_LINES_MARKED, {
            "rows": current.clearing_lines,
            "count": count,
            "clear_name": line_clear_name(count),
        }))

    compacted = (
        previous.clearing_lines
        and not current.clearing_lines
        and current.pieces_placed == previous.pieces_placed
        and current.board != previous.board
    )
    if compacted:
        count = len(previous.clearing_lines)
        events.append((EVENT_LINES_CLEARED, {
            "rows": previous.clearing_lines,
            "count": count,
            "clear_name": line_clear_name(count),
            "total": current.lines_cleared,
        }))

    if current.last_action is LastAction.HOLD and current.held is not None and (
        current.held != previous.held or current.hold_locked != previous.hold_locked
    ):
        events.append((EVENT_PIECE_HELD, {
            "held_type": current.held,
            "active_type": current.active.type if current.active is not None else None,
        }))
    elif previous.active is None and current.active is not None:
        events.append((EVENT_PIECE_SPAWNED, {
            "piece_type": current.active.type,
            "next_type": current.next_piece,
        }))
    elif (
        previous.active is not None
        and current.active is not None
        and previous.active != current.active
        and current.last_action is not None
    ):
        events.append((EVENT_PIECE_MOVED, {
            "kind": current.last_action,
            "piece": current.active,
        }))

    if current.score > previous.score:
        events.append((EVENT_SCORE_CHANGED, {
            "score": current.score,
            "delta": current.score - previous.score,
        }))

    if current.level > previous.level:
        events.append((EVENT_LEVEL_UP, {
            "level": current.level,
            "previous_level": previous.level,
            "drop_interval_ms": drop_interval_for(current.level),
        }))

    if current.status is not previous.status:
        events.append((EVENT_STATUS_CHANGED, {
            "previous_status": previous.status,
            "new_status": current.status,
        }))
        if current.status is GameStatus.GAME_OVER:
            score, level, lines = current.final_result
            events.append((EVENT_GAME_OVER, {
                "score": score,
                "level": level,
                "lines_cleared": lines,
            }))
    return events
