from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else references alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"  # payload: dt=float (seconds since previous frame)


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_PRESS = "key_press"            # payload: symbol=int, modifiers=int
EVENT_KEY_RELEASE = "key_release"        # payload: symbol=int, modifiers=int
EVENT_ACTION_REQUEST = "action_request"  # payload: action=Action, source=str


# ============================================================================
# GAME SESSION
# ============================================================================
EVENT_ACTION_APPLIED = "action_applied"    # payload: action=Action, changed=bool, source=str
EVENT_STATE_CHANGED = "state_changed"      # payload: previous=GameState, state=GameState, action=Action
EVENT_STATUS_CHANGED = "status_changed"    # payload: previous_status=GameStatus, new_status=GameStatus
EVENT_SESSION_RESET = "session_reset"      # payload: state=GameState


# ============================================================================
# PIECES & BOARD
# ============================================================================
EVENT_PIECE_SPAWNED = "piece_spawned"  # payload: piece_type=PieceType, next_type=PieceType
EVENT_PIECE_MOVED = "piece_moved"      # payload: kind=LastAction, piece=ActivePiece
EVENT_PIECE_LOCKED = "piece_locked"    # payload: piece_type=PieceType, hard_drop=bool, pieces_placed=int
EVENT_PIECE_HELD = "piece_held"        # payload: held_type=PieceType, active_type=PieceType|None
EVENT_LINES_MARKED = "lines_marked"    # payload: rows=tuple[int,...], count=int, clear_name=str
EVENT_LINES_CLEARED = "lines_cleared"  # payload: rows=tuple[int,...], count=int, clear_name=str, total=int


# ============================================================================
# SCORE & PROGRESSION
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"  # payload: score=int, delta=int
EVENT_LEVEL_UP = "level_up"            # payload: level=int, previous_level=int, drop_interval_ms=int
EVENT_GAME_OVER = "game_over"          # payload: score=int, level=int, lines_cleared=int
