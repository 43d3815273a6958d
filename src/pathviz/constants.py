# ============================================================================
# GRID DEFAULTS
# ============================================================================
GRID_WIDTH = 25
GRID_HEIGHT = 25
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 100

# Traversal weight assigned to each cell on reset (inclusive range).
MIN_CELL_COST = 1
MAX_CELL_COST = 10

# Probability that a cell becomes Blocked when randomizing the grid.
RANDOM_BLOCK_DENSITY = 0.3


# ============================================================================
# LAYOUT
# ============================================================================
CELL_SIZE = 25
MIN_CELL_SIZE = 8
MAX_CELL_SIZE = 64
# Cost labels are only drawn when a cell is at least this many pixels wide.
COST_LABEL_MIN_CELL_SIZE = 18
WINDOW_WIDTH = 900
WINDOW_HEIGHT = 760
STATUS_BAR_HEIGHT = 64
GRID_MARGIN = 12


# ============================================================================
# COLORS (symbolic role -> RGB, presentation only)
# ============================================================================
ROLE_COLORS = {
    "empty": (255, 255, 255),
    "blocked": (0, 0, 0),
    "start": (46, 160, 67),
    "end": (210, 40, 40),
    "path": (50, 90, 220),
}
GRID_LINE_COLOR = (90, 90, 90)
STATUS_BAR_COLOR = (60, 60, 60)
STATUS_TEXT_COLOR = (255, 255, 255)
NOTICE_TEXT_COLOR = (255, 210, 0)
COST_TEXT_COLOR = (120, 120, 120)
CURSOR_COLOR = (255, 165, 0)


# ============================================================================
# NOTICES
# ============================================================================
NOTICE_SECONDS = 4.0
MESSAGE_MISSING_ENDPOINTS = "Start and End must both be set"
MESSAGE_UNREACHABLE = "End is not reachable from Start"
MESSAGE_BACKEND_UNAVAILABLE = "Pathfinding service unavailable"


# ============================================================================
# ALGORITHMS
# ============================================================================
ALGORITHMS = ("dijkstra", "a-star", "bfs", "dfs")
DEFAULT_ALGORITHM = "dijkstra"


# ============================================================================
# KEY CODES (pyglet symbols; kept numeric so systems never import arcade)
# ============================================================================
KEY_1 = 49
KEY_2 = 50
KEY_3 = 51
KEY_4 = 52
KEY_SPACE = 32
KEY_ENTER = 65293
KEY_RETURN = 13
KEY_A = 97
KEY_B = 98
KEY_C = 99
KEY_R = 114
KEY_PLUS = 43
KEY_EQUAL = 61
KEY_MINUS = 45
KEY_BRACKETLEFT = 91
KEY_BRACKETRIGHT = 93
KEY_P = 112
KEY_H = 104
KEY_J = 106
KEY_K = 107
KEY_L = 108
KEY_ESCAPE = 65307
KEY_LEFT = 65361
KEY_UP = 65362
KEY_RIGHT = 65363
KEY_DOWN = 65364

MOUSE_BUTTON_LEFT = 1
