from typing import NamedTuple, Optional, Tuple

from pathviz.constants import GRID_MARGIN, MIN_CELL_SIZE, STATUS_BAR_HEIGHT


class GridGeometry(NamedTuple):
    cell_size: int
    left: float
    bottom: float
    rows: int
    cols: int

    @property
    def width(self) -> float:
        return self.cols * self.cell_size

    @property
    def height(self) -> float:
        return self.rows * self.cell_size

    @property
    def top(self) -> float:
        return self.bottom + self.height

    def cell_rect(self, row: int, col: int) -> Tuple[float, float, float, float]:
        """Return (left, right, bottom, top) of a cell; row 0 is the top row."""
        left = self.left + col * self.cell_size
        top = self.top - row * self.cell_size
        return left, left + self.cell_size, top - self.cell_size, top


def compute_grid_geometry(
    window_width: int,
    window_height: int,
    rows: int,
    cols: int,
    preferred_cell_size: int,
) -> GridGeometry:
    """Fit the grid above the status bar, shrinking cells when the window is too small.

    Mirrored by input hit-testing so clicks land on the cell that is drawn.
    """
    avail_w = window_width - 2 * GRID_MARGIN
    avail_h = window_height - STATUS_BAR_HEIGHT - 2 * GRID_MARGIN
    fit = int(min(avail_w / max(cols, 1), avail_h / max(rows, 1)))
    cell_size = max(MIN_CELL_SIZE, min(preferred_cell_size, fit))
    total_w = cols * cell_size
    total_h = rows * cell_size
    left = (window_width - total_w) / 2
    bottom = STATUS_BAR_HEIGHT + GRID_MARGIN + max(0.0, (avail_h - total_h) / 2)
    return GridGeometry(cell_size, left, bottom, rows, cols)


def cell_at_point(geometry: GridGeometry, x: float, y: float) -> Optional[Tuple[int, int]]:
    if x < geometry.left or x >= geometry.left + geometry.width:
        return None
    if y < geometry.bottom or y >= geometry.top:
        return None
    col = int((x - geometry.left) // geometry.cell_size)
    row = int((geometry.top - y) // geometry.cell_size)
    if 0 <= row < geometry.rows and 0 <= col < geometry.cols:
        return row, col
    return None
