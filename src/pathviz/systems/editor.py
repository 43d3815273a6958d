"""Editor state machine: pointer events over cells become role mutations.

Public surface is ``on_pointer_down(row, col)``, ``on_pointer_move(row, col)``
and ``on_pointer_up()``; the bus handlers forward to them. Painting only takes
effect in the Ready phase. While a result is shown, the next pointer-down
dismisses it instead of painting.

A keyboard cursor offers the same editing without a mouse: ``move_cursor``
steps it one cell, ``place_at_cursor`` applies the tool there and arms
continuous painting for Empty/Blocked, and ``cancel_cursor`` disarms it.
"""
from __future__ import annotations

import logging

from esper import World

from pathviz.components.editor_state import PAINT_TOOLS, EditorState, EditTool
from pathviz.components.run_state import RunPhase
from pathviz.events.bus import (
    EVENT_CURSOR_CANCEL,
    EVENT_CURSOR_MOVE,
    EVENT_CURSOR_PLACE,
    EVENT_EDIT_TOOL_SELECTED,
    EVENT_GRID_CHANGED,
    EVENT_GRID_RESET,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_MOVE,
    EVENT_POINTER_UP,
    EventBus,
)
from pathviz.utils.grid_state import get_editor_state, get_grid
from pathviz.utils.run_state import current_phase, dismiss_result

logger = logging.getLogger(__name__)


class EditorSystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_POINTER_DOWN, self._on_pointer_down_event)
        self.event_bus.subscribe(EVENT_POINTER_MOVE, self._on_pointer_move_event)
        self.event_bus.subscribe(EVENT_POINTER_UP, self._on_pointer_up_event)
        self.event_bus.subscribe(EVENT_EDIT_TOOL_SELECTED, self._on_tool_selected)
        self.event_bus.subscribe(EVENT_CURSOR_MOVE, self._on_cursor_move_event)
        self.event_bus.subscribe(EVENT_CURSOR_PLACE, self._on_cursor_place_event)
        self.event_bus.subscribe(EVENT_CURSOR_CANCEL, self._on_cursor_cancel_event)
        self.event_bus.subscribe(EVENT_GRID_RESET, self._on_grid_reset)

    @property
    def context(self) -> EditorState:
        return get_editor_state(self.world)

    # ------------------------------------------------------------------
    # Pointer surface
    # ------------------------------------------------------------------

    def on_pointer_down(self, row: int | None = None, col: int | None = None) -> None:
        """Handle a press; ``row``/``col`` are None when the press missed the grid."""
        inside = row is not None and col is not None
        ctx = self.context
        if inside:
            ctx.button_held = True
        if dismiss_result(self.world, self.event_bus):
            return
        if inside:
            self._apply_tool(row, col)

    def on_pointer_move(self, row: int, col: int) -> None:
        if not self.context.button_held:
            return
        self._apply_tool(row, col)

    def on_pointer_up(self) -> None:
        self.context.button_held = False

    def select_tool(self, tool: EditTool) -> None:
        self.context.tool = tool
        logger.debug("Edit tool -> %s", tool.name)

    # ------------------------------------------------------------------
    # Keyboard cursor
    # ------------------------------------------------------------------

    def move_cursor(self, drow: int, dcol: int) -> None:
        ctx = self.context
        grid = get_grid(self.world)
        row = max(0, min(grid.height - 1, ctx.cursor[0] + drow))
        col = max(0, min(grid.width - 1, ctx.cursor[1] + dcol))
        if (row, col) == ctx.cursor:
            return
        ctx.cursor = (row, col)
        if ctx.cursor_armed and ctx.tool in PAINT_TOOLS:
            self._apply_tool(row, col)

    def place_at_cursor(self) -> None:
        """Keyboard counterpart of a pointer-down on the cursor cell."""
        ctx = self.context
        if dismiss_result(self.world, self.event_bus):
            return
        ctx.cursor_armed = ctx.tool in PAINT_TOOLS
        self._apply_tool(*ctx.cursor)

    def cancel_cursor(self) -> None:
        self.context.cursor_armed = False

    # ------------------------------------------------------------------
    # Bus adapters
    # ------------------------------------------------------------------

    def _on_pointer_down_event(self, sender, **kwargs):
        self.on_pointer_down(kwargs.get('row'), kwargs.get('col'))

    def _on_pointer_move_event(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.on_pointer_move(row, col)

    def _on_pointer_up_event(self, sender, **kwargs):
        self.on_pointer_up()

    def _on_tool_selected(self, sender, **kwargs):
        tool = kwargs.get('tool')
        if isinstance(tool, EditTool):
            self.select_tool(tool)

    def _on_cursor_move_event(self, sender, **kwargs):
        self.move_cursor(int(kwargs.get('drow') or 0), int(kwargs.get('dcol') or 0))

    def _on_cursor_place_event(self, sender, **kwargs):
        self.place_at_cursor()

    def _on_cursor_cancel_event(self, sender, **kwargs):
        self.cancel_cursor()

    def _on_grid_reset(self, sender, **kwargs):
        ctx = self.context
        grid = get_grid(self.world)
        ctx.cursor = (min(ctx.cursor[0], grid.height - 1), min(ctx.cursor[1], grid.width - 1))

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def _apply_tool(self, row: int, col: int) -> None:
        phase = current_phase(self.world)
        if phase != RunPhase.READY:
            logger.debug("Edit at (%d, %d) ignored in %s", row, col, phase.name)
            return
        touched = get_grid(self.world).set_role(row, col, self.context.tool.role)
        if touched:
            self.event_bus.emit(EVENT_GRID_CHANGED, positions=touched, reason="paint")
