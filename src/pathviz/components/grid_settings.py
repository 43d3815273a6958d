from dataclasses import dataclass

from pathviz.constants import CELL_SIZE, GRID_HEIGHT, GRID_WIDTH


@dataclass(slots=True)
class GridSettings:
    """Sizing inputs; width/height changes reset the grid, cell_size only affects layout."""
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    cell_size: int = CELL_SIZE
