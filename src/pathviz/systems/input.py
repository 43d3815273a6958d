from __future__ import annotations

import logging

from esper import World

from pathviz.components.editor_state import EditTool
from pathviz.constants import (
    ALGORITHMS,
    KEY_1,
    KEY_2,
    KEY_3,
    KEY_4,
    KEY_A,
    KEY_B,
    KEY_BRACKETLEFT,
    KEY_BRACKETRIGHT,
    KEY_C,
    KEY_DOWN,
    KEY_ENTER,
    KEY_EQUAL,
    KEY_ESCAPE,
    KEY_H,
    KEY_J,
    KEY_K,
    KEY_L,
    KEY_LEFT,
    KEY_MINUS,
    KEY_P,
    KEY_PLUS,
    KEY_R,
    KEY_RETURN,
    KEY_RIGHT,
    KEY_SPACE,
    KEY_UP,
    MOUSE_BUTTON_LEFT,
)
from pathviz.events.bus import (
    EVENT_ALGORITHM_SELECTED,
    EVENT_CELL_SIZE_CHANGED,
    EVENT_CURSOR_CANCEL,
    EVENT_CURSOR_MOVE,
    EVENT_CURSOR_PLACE,
    EVENT_EDIT_TOOL_SELECTED,
    EVENT_GRID_CLEAR_REQUEST,
    EVENT_GRID_RANDOMIZE_REQUEST,
    EVENT_GRID_RESET_REQUEST,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_MOVE,
    EVENT_POINTER_UP,
    EVENT_RUN_REQUESTED,
    EventBus,
)
from pathviz.ui.layout import GridGeometry, cell_at_point, compute_grid_geometry
from pathviz.utils.grid_state import get_grid, get_grid_settings, get_run_settings

logger = logging.getLogger(__name__)

TOOL_KEYS = {
    KEY_1: EditTool.EMPTY,
    KEY_2: EditTool.BLOCKED,
    KEY_3: EditTool.START,
    KEY_4: EditTool.END,
}

# Arrows and vi keys; row 0 is the top row.
CURSOR_KEYS = {
    KEY_LEFT: (0, -1),
    KEY_H: (0, -1),
    KEY_RIGHT: (0, 1),
    KEY_L: (0, 1),
    KEY_UP: (-1, 0),
    KEY_K: (-1, 0),
    KEY_DOWN: (1, 0),
    KEY_J: (1, 0),
}


class InputSystem:
    """Translates window-space mouse and key input into grid and command events."""

    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self._last_move_cell: tuple[int, int] | None = None
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def geometry(self) -> GridGeometry:
        grid = get_grid(self.world)
        settings = get_grid_settings(self.world)
        return compute_grid_geometry(
            self.window.width, self.window.height, grid.height, grid.width, settings.cell_size
        )

    # ------------------------------------------------------------------
    # Mouse
    # ------------------------------------------------------------------

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button', MOUSE_BUTTON_LEFT)
        if x is None or y is None:
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        cell = cell_at_point(self.geometry(), x, y)
        self._last_move_cell = cell
        if cell is None:
            self.event_bus.emit(EVENT_POINTER_DOWN, row=None, col=None)
        else:
            self.event_bus.emit(EVENT_POINTER_DOWN, row=cell[0], col=cell[1])

    def on_mouse_move(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        cell = cell_at_point(self.geometry(), x, y)
        if cell is None or cell == self._last_move_cell:
            self._last_move_cell = cell
            return
        self._last_move_cell = cell
        self.event_bus.emit(EVENT_POINTER_MOVE, row=cell[0], col=cell[1])

    def on_mouse_release(self, sender, **kwargs):
        button = kwargs.get('button', MOUSE_BUTTON_LEFT)
        if button != MOUSE_BUTTON_LEFT:
            return
        self._last_move_cell = None
        self.event_bus.emit(EVENT_POINTER_UP)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        self.handle_key_press(int(symbol), int(kwargs.get('modifiers') or 0))

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> None:
        if symbol in TOOL_KEYS:
            self.event_bus.emit(EVENT_EDIT_TOOL_SELECTED, tool=TOOL_KEYS[symbol])
        elif symbol in CURSOR_KEYS:
            drow, dcol = CURSOR_KEYS[symbol]
            self.event_bus.emit(EVENT_CURSOR_MOVE, drow=drow, dcol=dcol)
        elif symbol == KEY_P:
            self.event_bus.emit(EVENT_CURSOR_PLACE)
        elif symbol == KEY_ESCAPE:
            self.event_bus.emit(EVENT_CURSOR_CANCEL)
        elif symbol in (KEY_SPACE, KEY_ENTER, KEY_RETURN):
            self.event_bus.emit(EVENT_RUN_REQUESTED)
        elif symbol == KEY_R:
            settings = get_grid_settings(self.world)
            self.event_bus.emit(EVENT_GRID_RESET_REQUEST, width=settings.width, height=settings.height)
        elif symbol == KEY_C:
            self.event_bus.emit(EVENT_GRID_CLEAR_REQUEST)
        elif symbol == KEY_B:
            self.event_bus.emit(EVENT_GRID_RANDOMIZE_REQUEST, density=None)
        elif symbol == KEY_A:
            current = get_run_settings(self.world).algorithm
            idx = ALGORITHMS.index(current) if current in ALGORITHMS else -1
            self.event_bus.emit(EVENT_ALGORITHM_SELECTED, algorithm=ALGORITHMS[(idx + 1) % len(ALGORITHMS)])
        elif symbol in (KEY_PLUS, KEY_EQUAL, KEY_MINUS):
            delta = -1 if symbol == KEY_MINUS else 1
            settings = get_grid_settings(self.world)
            self.event_bus.emit(
                EVENT_GRID_RESET_REQUEST,
                width=settings.width + delta,
                height=settings.height + delta,
            )
        elif symbol in (KEY_BRACKETLEFT, KEY_BRACKETRIGHT):
            delta = -2 if symbol == KEY_BRACKETLEFT else 2
            settings = get_grid_settings(self.world)
            self.event_bus.emit(EVENT_CELL_SIZE_CHANGED, cell_size=settings.cell_size + delta)
        else:
            logger.debug("Unbound key %s", symbol)
