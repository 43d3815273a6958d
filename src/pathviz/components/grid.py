"""Grid component: fixed-size row-major cells with singleton Start/End tracking."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from pathviz.components.cell_role import CellRole
from pathviz.constants import MAX_CELL_COST, MIN_CELL_COST
from pathviz.errors import GridInvariantError, InvalidDimension, OutOfBounds

Pos = Tuple[int, int]  # (row, col)


@dataclass(slots=True)
class Cell:
    role: CellRole = CellRole.EMPTY
    cost: int = 1


@dataclass(slots=True)
class Grid:
    """Owns the cells and the invariant that Start and End each appear at most once.

    ``start`` and ``end`` cache the coordinates of the cells holding those roles.
    Every mutating method returns the coordinates it touched so callers can publish
    a single change notification per call.
    """

    width: int = 0
    height: int = 0
    cells: List[Cell] = field(default_factory=list)
    start: Optional[Pos] = None
    end: Optional[Pos] = None

    @classmethod
    def create(cls, width: int, height: int, rng: random.Random | None = None) -> "Grid":
        grid = cls()
        grid.reset(width, height, rng=rng)
        return grid

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self, width: int, height: int, *, rng: random.Random | None = None) -> None:
        """Replace every cell with an Empty one carrying a fresh cost."""
        if width < 1 or height < 1:
            raise InvalidDimension(f"Grid dimensions must be >= 1, got {width}x{height}")
        rng = rng or random.Random()
        self.cells = [
            Cell(role=CellRole.EMPTY, cost=rng.randint(MIN_CELL_COST, MAX_CELL_COST))
            for _ in range(width * height)
        ]
        self.width = width
        self.height = height
        self.start = None
        self.end = None

    def clear(self) -> List[Pos]:
        """Set every non-Empty cell back to Empty, keeping costs."""
        touched: List[Pos] = []
        for idx, cell in enumerate(self.cells):
            if cell.role != CellRole.EMPTY:
                cell.role = CellRole.EMPTY
                touched.append(self._pos(idx))
        self.start = None
        self.end = None
        return touched

    def randomize_blocks(self, density: float, *, rng: random.Random | None = None) -> List[Pos]:
        """Clear the grid, then block each cell independently with probability ``density``."""
        rng = rng or random.Random()
        touched = set(self.clear())
        for idx, cell in enumerate(self.cells):
            if rng.random() < density:
                cell.role = CellRole.BLOCKED
                touched.add(self._pos(idx))
        return sorted(touched)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def role_at(self, row: int, col: int) -> CellRole:
        return self._cell(row, col).role

    def cost_at(self, row: int, col: int) -> int:
        return self._cell(row, col).cost

    def positions_with(self, role: CellRole) -> List[Pos]:
        return [self._pos(idx) for idx, cell in enumerate(self.cells) if cell.role == role]

    def iter_cells(self) -> Iterator[Tuple[Pos, Cell]]:
        for idx, cell in enumerate(self.cells):
            yield self._pos(idx), cell

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_role(self, row: int, col: int, role: CellRole) -> List[Pos]:
        """Assign ``role`` to one cell, relocating Start/End in the same step.

        Returns the touched coordinates; an empty list means the grid did not change.
        """
        target = self._cell(row, col)
        pos = (row, col)
        if target.role == role:
            return []
        touched: List[Pos] = [pos]

        if role == CellRole.START and self.start is not None:
            self._index_cell(self.start).role = CellRole.EMPTY
            touched.insert(0, self.start)
        elif role == CellRole.END and self.end is not None:
            self._index_cell(self.end).role = CellRole.EMPTY
            touched.insert(0, self.end)

        if target.role == CellRole.START:
            self.start = None
        elif target.role == CellRole.END:
            self.end = None

        target.role = role
        if role == CellRole.START:
            self.start = pos
        elif role == CellRole.END:
            self.end = pos
        return touched

    def mark_path(self, positions) -> List[Pos]:
        """Overlay PATH on the given cells; Start, End and Blocked cells are left alone."""
        touched: List[Pos] = []
        for row, col in positions:
            cell = self._cell(row, col)
            if cell.role == CellRole.EMPTY:
                cell.role = CellRole.PATH
                touched.append((row, col))
        return touched

    def clear_overlay(self) -> List[Pos]:
        touched: List[Pos] = []
        for idx, cell in enumerate(self.cells):
            if cell.role == CellRole.PATH:
                cell.role = CellRole.EMPTY
                touched.append(self._pos(idx))
        return touched

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def check_invariants(self) -> None:
        """Raise GridInvariantError if the cached endpoints disagree with the cells."""
        starts = self.positions_with(CellRole.START)
        ends = self.positions_with(CellRole.END)
        if len(self.cells) != self.width * self.height:
            raise GridInvariantError(
                f"{len(self.cells)} cells for a {self.width}x{self.height} grid"
            )
        if len(starts) > 1 or len(ends) > 1:
            raise GridInvariantError(f"multiple endpoints: starts={starts} ends={ends}")
        if self.start != (starts[0] if starts else None):
            raise GridInvariantError(f"stale start position {self.start}, cells say {starts}")
        if self.end != (ends[0] if ends else None):
            raise GridInvariantError(f"stale end position {self.end}, cells say {ends}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _pos(self, idx: int) -> Pos:
        return divmod(idx, self.width)

    def _cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.width, self.height)
        return self.cells[row * self.width + col]

    def _index_cell(self, pos: Pos) -> Cell:
        return self.cells[pos[0] * self.width + pos[1]]
