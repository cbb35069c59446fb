from blockfall.components.actions import Action, ActionType, clear_lines_action, rotate_action
from blockfall.components.game_state import GameStatus, LastAction, create_initial_state
from blockfall.components.tetromino import ActivePiece, PieceType
from blockfall.systems.board_ops import find_full_lines
from blockfall.systems.game_reducer import is_valid_action, reduce, spawn_piece_for
from tests.helpers import SEED, board_from_strings, empty_rows, playing_state

START = Action.of(ActionType.START_GAME)
LOCK = Action.of(ActionType.LOCK_PIECE)
SPAWN = Action.of(ActionType.SPAWN_PIECE)
HOLD = Action.of(ActionType.HOLD_PIECE)


def test_initial_state_is_ready_and_empty():
    state = create_initial_state(seed=SEED)
    assert state.status is GameStatus.READY
    assert state.active is None
    assert (state.score, state.level, state.lines_cleared) == (0, 1, 0)
    assert state.board.rows == 20 and state.board.cols == 10


def test_start_spawns_first_queued_piece():
    state = create_initial_state(seed=SEED)
    first = state.next_piece
    started = reduce(state, START)
    assert started.status is GameStatus.PLAYING
    assert started.active == spawn_piece_for(started.board, first)
    assert started.active.x == 3 and started.active.y == -1


def test_piece_actions_are_noops_outside_playing():
    ready = create_initial_state(seed=SEED)
    for kind in (ActionType.MOVE_LEFT, ActionType.HARD_DROP, ActionType.HOLD_PIECE, ActionType.LOCK_PIECE):
        assert reduce(ready, Action.of(kind)) is ready
    paused = reduce(reduce(ready, START), Action.of(ActionType.PAUSE_GAME))
    assert paused.status is GameStatus.PAUSED
    assert reduce(paused, Action.of(ActionType.MOVE_LEFT)) is paused
    assert reduce(paused, Action.of(ActionType.PAUSE_GAME)) is paused
    resumed = reduce(paused, Action.of(ActionType.RESUME_GAME))
    assert resumed.status is GameStatus.PLAYING
    assert resumed.active == paused.active


def test_rejected_move_returns_identical_state():
    state = playing_state(active=ActivePiece(PieceType.O, 0, -1, 5))
    assert not is_valid_action(create_initial_state(seed=SEED), Action.of(ActionType.MOVE_LEFT))
    assert reduce(state, Action.of(ActionType.MOVE_LEFT)) is state


def test_moves_and_rotation_set_last_action():
    state = playing_state(active=ActivePiece(PieceType.T, 0, 3, 5))
    moved = reduce(state, Action.of(ActionType.MOVE_RIGHT))
    assert moved.active.x == 4
    assert moved.last_action is LastAction.MOVE
    turned = reduce(moved, rotate_action(clockwise=False))
    assert turned.active.rotation == 3
    assert turned.last_action is LastAction.ROTATE


def test_soft_drop_scores_only_successful_moves():
    state = playing_state(active=ActivePiece(PieceType.O, 0, 3, 16))
    dropped = reduce(state, Action.of(ActionType.MOVE_DOWN))
    assert dropped.score == 1
    assert dropped.last_action is LastAction.DROP
    assert reduce(dropped, Action.of(ActionType.MOVE_DOWN)) is dropped


def test_hard_drop_scores_and_locks():
    state = playing_state(active=ActivePiece(PieceType.O, 0, 3, -1))
    dropped = reduce(state, Action.of(ActionType.HARD_DROP))
    assert dropped.active is None
    assert dropped.score == 36
    assert dropped.pieces_placed == 1
    assert dropped.last_action is LastAction.HARD_DROP
    assert dropped.board.get(4, 19) is PieceType.O


def test_single_line_clear_scenario():
    board = board_from_strings(empty_rows(19) + ["#####.####"])
    state = playing_state(board, ActivePiece(PieceType.I, 1, 3, 16))
    locked = reduce(state, LOCK)
    assert locked.score == 100
    assert locked.lines_cleared == 1
    assert locked.level == 1
    assert locked.clearing_lines == (19,)
    assert locked.is_animating
    assert find_full_lines(locked.board) == [19]
    # Spawning waits for the clear phase.
    assert reduce(locked, SPAWN) is locked
    assert reduce(locked, clear_lines_action(2)) is locked

    cleared = reduce(locked, clear_lines_action(1))
    assert cleared.clearing_lines == ()
    assert not cleared.is_animating
    assert cleared.board.cells[0] == (None,) * 10
    assert cleared.board.rows == 20
    assert [cleared.board.get(5, y) for y in (17, 18, 19)] == [PieceType.I] * 3
    assert find_full_lines(cleared.board) == []
    assert cleared.score == 100


def test_tetris_at_level_two_scenario():
    board = board_from_strings(empty_rows(16) + ["#########."] * 4)
    state = playing_state(board, ActivePiece(PieceType.I, 1, 7, 16), level=2, lines_cleared=10)
    locked = reduce(state, LOCK)
    assert locked.score == 1600
    assert locked.lines_cleared == 14
    assert locked.level == 2
    assert locked.clearing_lines == (16, 17, 18, 19)


def test_level_up_applies_after_the_clear_is_scored():
    board = board_from_strings(empty_rows(19) + ["#####.####"])
    state = playing_state(board, ActivePiece(PieceType.I, 1, 3, 16), lines_cleared=9)
    locked = reduce(state, LOCK)
    assert locked.score == 100
    assert locked.level == 2


def test_spawn_on_blocked_board_is_game_over():
    board = board_from_strings(["...####..."] + empty_rows(19))
    state = playing_state(board, None)
    over = reduce(state, SPAWN)
    assert over.status is GameStatus.GAME_OVER
    assert over.active is None


def test_lock_with_blocked_spawn_ends_game():
    board = board_from_strings(["...####..."] + empty_rows(19))
    state = playing_state(board, ActivePiece(PieceType.O, 0, -1, 17))
    over = reduce(state, LOCK)
    assert over.status is GameStatus.GAME_OVER
    assert over.active is None
    assert over.pieces_placed == 1
    assert over.final_result == (over.score, over.level, over.lines_cleared)
    assert reduce(over, Action.of(ActionType.MOVE_LEFT)) is over


def test_hold_then_hold_again_is_noop():
    state = reduce(create_initial_state(seed=SEED), START)
    first = state.active.type
    second = state.next_piece
    held = reduce(state, HOLD)
    assert held.held is first
    assert held.active.type is second
    assert held.hold_locked
    assert not held.can_hold
    assert held.last_action is LastAction.HOLD
    assert reduce(held, HOLD) is held


def test_hold_swaps_with_held_piece_after_lock():
    state = reduce(create_initial_state(seed=SEED), START)
    first = state.active.type
    held = reduce(state, HOLD)
    locked = reduce(held, Action.of(ActionType.HARD_DROP))
    assert not locked.hold_locked
    spawned = reduce(locked, SPAWN)
    current = spawned.active.type
    swapped = reduce(spawned, HOLD)
    assert swapped.active.type is first
    assert swapped.held is current
    assert swapped.active.y == -1


def test_restart_resets_counters_and_keeps_dimensions():
    state = playing_state(
        board_from_strings(empty_rows(19) + ["#####.####"]),
        ActivePiece(PieceType.T, 0, 3, 3),
        score=2500,
        level=3,
        lines_cleared=25,
        pieces_placed=40,
        held=PieceType.I,
    )
    restarted = reduce(state, Action.of(ActionType.RESTART_GAME))
    fresh = create_initial_state(seed=restarted.queue.seed)
    assert restarted == fresh
    assert restarted.status is GameStatus.READY
    assert (restarted.score, restarted.level, restarted.lines_cleared, restarted.pieces_placed) == (0, 1, 0, 0)
    assert restarted.queue.seed != state.queue.seed
    assert reduce(state, Action.of(ActionType.RESTART_GAME)) == restarted


def test_game_tick_leaves_state_untouched():
    state = playing_state(active=ActivePiece(PieceType.T, 0, 3, 3))
    assert reduce(state, Action.of(ActionType.GAME_TICK)) is state


def test_counters_are_monotonic_over_a_session():
    state = reduce(create_initial_state(seed=SEED), START)
    script = [
        ActionType.MOVE_LEFT, ActionType.MOVE_DOWN, ActionType.HARD_DROP, ActionType.SPAWN_PIECE,
        ActionType.ROTATE, ActionType.MOVE_RIGHT, ActionType.MOVE_RIGHT, ActionType.HARD_DROP,
        ActionType.SPAWN_PIECE, ActionType.HOLD_PIECE, ActionType.HARD_DROP, ActionType.SPAWN_PIECE,
    ] * 6
    for kind in script:
        nxt = reduce(state, Action.of(kind))
        assert nxt.score >= state.score
        assert nxt.level >= state.level
        assert nxt.lines_cleared >= state.lines_cleared
        assert nxt.pieces_placed >= state.pieces_placed
        assert not (nxt.status is GameStatus.GAME_OVER and nxt.active is not None)
        state = nxt


def test_hard_drop_scores_two_points_per_cell_of_drop_distance():
    from blockfall.systems.movement import hard_drop_distance

    board = board_from_strings(empty_rows(15) + ["#########."] * 5)
    piece = ActivePiece(PieceType.I, 0, 3, -1)
    state = playing_state(board, piece)
    dropped = reduce(state, Action.of(ActionType.HARD_DROP))
    assert hard_drop_distance(board, piece) == 14
    assert dropped.score == 28
    assert dropped.board.get(3, 14) is PieceType.I
