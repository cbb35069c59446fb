from blockfall.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    SIDE_GAP,
    SIDE_PANEL_WIDTH,
)

def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int):
    """Return (cell_size, board_left, board_bottom, panel_left) for the playfield.

    The board may not exceed the configured fraction of the window; the side panel
    sits to the right of the board.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    cell_by_w = max_board_w / cols
    cell_by_h = max_board_h / rows
    cell_size = int(min(cell_by_w, cell_by_h))
    if cell_size < 8:
        cell_size = 8  # safety minimum
    board_width = cols * cell_size
    total_width = board_width + SIDE_GAP + SIDE_PANEL_WIDTH
    board_left = max(0.0, (window_width - total_width) / 2)
    board_bottom = BOTTOM_MARGIN
    panel_left = board_left + board_width + SIDE_GAP
    return cell_size, board_left, board_bottom, panel_left
