BOARD_ROWS = 20
BOARD_COLS = 10

# Spawn row of the 4x4 occupancy matrix origin (may sit above row 0); the column
# is centred on the board width.
SPAWN_Y = -1
SPAWN_ROTATION = 0

# Drop timing (milliseconds). Each level is 20% faster, never faster than the floor.
INITIAL_DROP_INTERVAL_MS = 1000
MIN_DROP_INTERVAL_MS = 50
DROP_SPEEDUP_PER_LEVEL = 0.8
LEVEL_UP_LINES = 10

# Line clear points, multiplied by the current level.
LINE_CLEAR_SCORES = {
    1: 100,
    2: 300,
    3: 500,
    4: 800,
}
LINE_CLEAR_NAMES = {
    1: "Single",
    2: "Double",
    3: "Triple",
    4: "Tetris",
}
SOFT_DROP_POINTS_PER_CELL = 1
HARD_DROP_POINTS_PER_CELL = 2

# Number of upcoming pieces kept materialised in the queue (one full bag).
QUEUE_PREVIEW_COUNT = 7

# Keyboard auto-repeat for held movement keys (seconds).
KEY_REPEAT_DELAY = 0.15
KEY_REPEAT_INTERVAL = 0.05

# Stack height (in rows from the top) at which the renderer shows a caution outline.
CAUTION_ROWS = 4

# Window and layout
WINDOW_WIDTH = 640
WINDOW_HEIGHT = 720
BOTTOM_MARGIN = 20
SIDE_PANEL_WIDTH = 200
SIDE_GAP = 24
PREVIEW_CELL_SIZE = 20

BOARD_MAX_WIDTH_PCT = 0.60
BOARD_MAX_HEIGHT_PCT = 0.92

PIECE_COLORS = {
    'I': (0, 186, 255),
    'O': (255, 209, 0),
    'T': (191, 81, 255),
    'S': (0, 204, 136),
    'Z': (255, 65, 65),
    'J': (0, 112, 224),
    'L': (255, 144, 0),
}
GRID_COLOR = (40, 40, 48)
FRAME_COLOR = (80, 80, 95)
CAUTION_COLOR = (226, 62, 62)
GHOST_ALPHA = 70
