from __future__ import annotations

from enum import Enum

from blockfall.constants import (
    DROP_SPEEDUP_PER_LEVEL,
    HARD_DROP_POINTS_PER_CELL,
    INITIAL_DROP_INTERVAL_MS,
    LEVEL_UP_LINES,
    LINE_CLEAR_NAMES,
    LINE_CLEAR_SCORES,
    MIN_DROP_INTERVAL_MS,
    SOFT_DROP_POINTS_PER_CELL,
)


class DropKind(Enum):
    SOFT = "soft"
    HARD = "hard"


def score_for_clear(line_count: int, level: int) -> int:
    """Points for clearing ``line_count`` rows at once; counts outside 1-4 score nothing."""
    return LINE_CLEAR_SCORES.get(line_count, 0) * level


def score_for_drop(cells_moved: int, drop_kind: DropKind) -> int:
    if cells_moved <= 0:
        return 0
    per_cell = HARD_DROP_POINTS_PER_CELL if drop_kind is DropKind.HARD else SOFT_DROP_POINTS_PER_CELL
    return cells_moved * per_cell


def level_for(total_lines_cleared: int) -> int:
    return 1 + max(0, total_lines_cleared) // LEVEL_UP_LINES


def drop_interval_for(level: int) -> int:
    """Milliseconds between automatic drops; non-increasing in level, floored."""
    steps = max(0, level - 1)
    interval = int(INITIAL_DROP_INTERVAL_MS * (DROP_SPEEDUP_PER_LEVEL ** steps))
    return max(MIN_DROP_INTERVAL_MS, interval)


def line_clear_name(line_count: int) -> str:
    return LINE_CLEAR_NAMES.get(line_count, "")
