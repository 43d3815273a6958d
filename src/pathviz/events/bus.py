from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# RAW INPUT (window coordinates / key symbols)
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_MOUSE_MOVE = "mouse_move"                    # payload: x, y
EVENT_MOUSE_RELEASE = "mouse_release"              # payload: x, y, button
EVENT_KEY_PRESS = "key_press"                      # payload: symbol, modifiers


# ============================================================================
# POINTER (grid coordinates)
# ============================================================================
EVENT_POINTER_DOWN = "pointer_down"                # payload: row=int|None, col=int|None (None when outside the grid)
EVENT_POINTER_MOVE = "pointer_move"                # payload: row=int, col=int
EVENT_POINTER_UP = "pointer_up"                    # payload: None


# ============================================================================
# CONTROL SURFACE COMMANDS
# ============================================================================
EVENT_EDIT_TOOL_SELECTED = "edit_tool_selected"            # payload: tool=EditTool
EVENT_RUN_REQUESTED = "run_requested"                      # payload: None
EVENT_GRID_RESET_REQUEST = "grid_reset_request"            # payload: width=int, height=int
EVENT_GRID_CLEAR_REQUEST = "grid_clear_request"            # payload: None
EVENT_GRID_RANDOMIZE_REQUEST = "grid_randomize_request"    # payload: density=float|None
EVENT_ALGORITHM_SELECTED = "algorithm_selected"            # payload: algorithm=str
EVENT_CELL_SIZE_CHANGED = "cell_size_changed"              # payload: cell_size=int


# ============================================================================
# KEYBOARD CURSOR
# ============================================================================
EVENT_CURSOR_MOVE = "cursor_move"                  # payload: drow=int, dcol=int
EVENT_CURSOR_PLACE = "cursor_place"                # payload: None
EVENT_CURSOR_CANCEL = "cursor_cancel"              # payload: None


# ============================================================================
# GRID STATE
# ============================================================================
EVENT_GRID_RESET = "grid_reset"                    # payload: width=int, height=int
EVENT_GRID_CHANGED = "grid_changed"                # payload: positions=list[(r,c)], reason=str


# ============================================================================
# RUN LIFECYCLE
# ============================================================================
EVENT_RUN_PHASE_CHANGED = "run_phase_changed"      # payload: previous_phase=RunPhase, new_phase=RunPhase
EVENT_PATH_FOUND = "path_found"                    # payload: path=list[(r,c)], cost=int
EVENT_PATH_UNREACHABLE = "path_unreachable"        # payload: None


# ============================================================================
# NOTIFICATIONS
# ============================================================================
EVENT_NOTIFY = "notify"                            # payload: message=str, kind=str
