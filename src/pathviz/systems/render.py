from typing import Any

from esper import World

from pathviz.components.cell_role import CellRole
from pathviz.components.run_state import RunPhase
from pathviz.constants import (
    COST_LABEL_MIN_CELL_SIZE,
    COST_TEXT_COLOR,
    CURSOR_COLOR,
    GRID_LINE_COLOR,
    NOTICE_TEXT_COLOR,
    ROLE_COLORS,
    STATUS_BAR_COLOR,
    STATUS_BAR_HEIGHT,
    STATUS_TEXT_COLOR,
)
from pathviz.events.bus import EVENT_GRID_RESET, EventBus
from pathviz.ui.layout import GridGeometry, compute_grid_geometry
from pathviz.utils.grid_state import get_editor_state, get_grid, get_grid_settings, get_notice, get_run_settings
from pathviz.utils.run_state import get_run_state

PHASE_LABELS = {
    RunPhase.READY: "Ready",
    RunPhase.SOLVING: "Solving...",
    RunPhase.SHOWING_RESULT: "Result (click to edit)",
}
HELP_TEXT = (
    "1-4 tool  Space run  arrows/HJKL cursor  P place  Esc stop  "
    "A algorithm  C clear  R reset  B random  +/- size  [/] zoom"
)


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_GRID_RESET, self.on_grid_reset)
        self._last_geometry: GridGeometry | None = None

    def on_grid_reset(self, sender, **kwargs):
        self._last_geometry = None

    @property
    def geometry(self) -> GridGeometry | None:
        return self._last_geometry

    def status_lines(self) -> list[str]:
        editor = get_editor_state(self.world)
        run = get_run_state(self.world)
        grid = get_grid(self.world)
        line = (
            f"Tool: {editor.tool.name.title()}   "
            f"Algorithm: {get_run_settings(self.world).algorithm}   "
            f"Grid: {grid.width}x{grid.height}   "
            f"Cursor: {editor.cursor[0]},{editor.cursor[1]}{'*' if editor.cursor_armed else ''}   "
            f"{PHASE_LABELS[run.phase]}"
        )
        if run.phase == RunPhase.SHOWING_RESULT and run.last_path_length:
            line += f"   Path: {run.last_path_length} cells, cost {run.last_path_cost}"
        lines = [line]
        notice = get_notice(self.world)
        lines.append(notice.message if notice.visible else HELP_TEXT)
        return lines

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        grid = get_grid(self.world)
        settings = get_grid_settings(self.world)
        geometry = compute_grid_geometry(
            self.window.width, self.window.height, grid.height, grid.width, settings.cell_size
        )
        self._last_geometry = geometry
        if headless:
            return
        self._draw_grid(arcade, geometry)
        self._draw_status(arcade)

    def _draw_grid(self, arcade: Any, geometry: GridGeometry) -> None:
        grid = get_grid(self.world)
        show_costs = geometry.cell_size >= COST_LABEL_MIN_CELL_SIZE
        font_size = max(6, geometry.cell_size // 3)
        for (row, col), cell in grid.iter_cells():
            left, right, bottom, top = geometry.cell_rect(row, col)
            arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, ROLE_COLORS[cell.role.value])
            arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, GRID_LINE_COLOR, 1)
            if show_costs and cell.role in (CellRole.EMPTY, CellRole.PATH):
                color = STATUS_TEXT_COLOR if cell.role == CellRole.PATH else COST_TEXT_COLOR
                arcade.draw_text(
                    str(cell.cost),
                    (left + right) / 2,
                    (bottom + top) / 2,
                    color,
                    font_size,
                    anchor_x="center",
                    anchor_y="center",
                )
        self._draw_cursor(arcade, geometry)

    def _draw_cursor(self, arcade: Any, geometry: GridGeometry) -> None:
        row, col = get_editor_state(self.world).cursor
        if not get_grid(self.world).in_bounds(row, col):
            return
        left, right, bottom, top = geometry.cell_rect(row, col)
        arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, CURSOR_COLOR, 3)

    def _draw_status(self, arcade: Any) -> None:
        width = self.window.width
        arcade.draw_lrbt_rectangle_filled(0, width, 0, STATUS_BAR_HEIGHT, STATUS_BAR_COLOR)
        status, second = self.status_lines()
        notice_visible = get_notice(self.world).visible
        arcade.draw_text(status, 12, STATUS_BAR_HEIGHT - 24, STATUS_TEXT_COLOR, 13)
        arcade.draw_text(
            second,
            12,
            12,
            NOTICE_TEXT_COLOR if notice_visible else STATUS_TEXT_COLOR,
            12,
        )
