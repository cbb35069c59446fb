"""Abstract action vocabulary accepted by the game reducer."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    START_GAME = "START_GAME"
    MOVE_LEFT = "MOVE_LEFT"
    MOVE_RIGHT = "MOVE_RIGHT"
    MOVE_DOWN = "MOVE_DOWN"
    ROTATE = "ROTATE"
    HARD_DROP = "HARD_DROP"
    HOLD_PIECE = "HOLD_PIECE"
    PAUSE_GAME = "PAUSE_GAME"
    RESUME_GAME = "RESUME_GAME"
    RESTART_GAME = "RESTART_GAME"
    LOCK_PIECE = "LOCK_PIECE"
    SPAWN_PIECE = "SPAWN_PIECE"
    GAME_TICK = "GAME_TICK"
    CLEAR_LINES = "CLEAR_LINES"


@dataclass(frozen=True, slots=True)
class Action:
    """A single reducer input.

    ``line_count`` is only meaningful for ``CLEAR_LINES``; ``clockwise`` only for
    ``ROTATE``.
    """
    type: ActionType
    line_count: int = 0
    clockwise: bool = True

    @classmethod
    def of(cls, action_type: ActionType) -> "Action":
        return _SIMPLE_ACTIONS[action_type]


def clear_lines_action(line_count: int) -> Action:
    return Action(ActionType.CLEAR_LINES, line_count=line_count)


def rotate_action(clockwise: bool = True) -> Action:
    return Action(ActionType.ROTATE, clockwise=clockwise)


_SIMPLE_ACTIONS = {action_type: Action(action_type) for action_type in ActionType}
