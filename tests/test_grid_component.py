import random

import pytest

from pathviz.components.cell_role import CellRole
from pathviz.components.grid import Grid
from pathviz.constants import MAX_CELL_COST, MIN_CELL_COST
from pathviz.errors import GridInvariantError, InvalidDimension, OutOfBounds


def _grid(width=3, height=3, seed=0) -> Grid:
    return Grid.create(width, height, rng=random.Random(seed))


def _snapshot(grid: Grid):
    return [(c.role, c.cost) for c in grid.cells], grid.start, grid.end


def test_reset_creates_empty_cells_with_costs_in_range():
    grid = _grid(4, 2)
    assert grid.width == 4 and grid.height == 2
    assert len(grid.cells) == 8
    assert all(c.role == CellRole.EMPTY for c in grid.cells)
    assert all(MIN_CELL_COST <= c.cost <= MAX_CELL_COST for c in grid.cells)
    assert grid.start is None and grid.end is None


def test_reset_clears_everything():
    grid = _grid()
    grid.set_role(0, 0, CellRole.START)
    grid.set_role(2, 2, CellRole.END)
    grid.set_role(1, 1, CellRole.BLOCKED)
    grid.mark_path([(0, 1)])

    grid.reset(3, 3, rng=random.Random(1))

    assert all(c.role == CellRole.EMPTY for c in grid.cells)
    assert grid.start is None and grid.end is None
    grid.check_invariants()


@pytest.mark.parametrize("width,height", [(0, 3), (3, 0), (-1, 5)])
def test_reset_rejects_bad_dimensions_without_mutation(width, height):
    grid = _grid()
    grid.set_role(0, 0, CellRole.START)
    before = _snapshot(grid)
    with pytest.raises(InvalidDimension):
        grid.reset(width, height)
    assert _snapshot(grid) == before


def test_set_start_relocates_previous_start_in_one_call():
    grid = _grid()
    grid.set_role(0, 0, CellRole.START)

    touched = grid.set_role(1, 2, CellRole.START)

    assert touched == [(0, 0), (1, 2)]
    assert grid.role_at(0, 0) == CellRole.EMPTY
    assert grid.role_at(1, 2) == CellRole.START
    assert grid.start == (1, 2)
    grid.check_invariants()


def test_set_end_relocates_previous_end():
    grid = _grid()
    grid.set_role(2, 2, CellRole.END)
    grid.set_role(2, 0, CellRole.END)
    assert grid.positions_with(CellRole.END) == [(2, 0)]
    assert grid.end == (2, 0)


def test_overwriting_start_with_end_clears_start_position():
    grid = _grid()
    grid.set_role(0, 0, CellRole.START)
    grid.set_role(1, 1, CellRole.END)

    grid.set_role(0, 0, CellRole.END)

    assert grid.start is None
    assert grid.end == (0, 0)
    assert grid.role_at(1, 1) == CellRole.EMPTY
    grid.check_invariants()


@pytest.mark.parametrize("role", [CellRole.EMPTY, CellRole.BLOCKED])
def test_painting_over_start_clears_start_position(role):
    grid = _grid()
    grid.set_role(1, 1, CellRole.START)
    grid.set_role(1, 1, role)
    assert grid.start is None
    assert grid.role_at(1, 1) == role


def test_same_role_is_idempotent():
    grid = _grid()
    grid.set_role(0, 0, CellRole.START)
    grid.set_role(1, 0, CellRole.BLOCKED)
    before = _snapshot(grid)

    assert grid.set_role(0, 0, CellRole.START) == []
    assert grid.set_role(1, 0, CellRole.BLOCKED) == []
    assert _snapshot(grid) == before


def test_out_of_bounds_rejected_and_grid_unchanged():
    grid = _grid()
    before = _snapshot(grid)
    with pytest.raises(OutOfBounds):
        grid.set_role(5, 5, CellRole.BLOCKED)
    with pytest.raises(OutOfBounds):
        grid.role_at(-1, 0)
    with pytest.raises(OutOfBounds):
        grid.cost_at(0, 3)
    assert _snapshot(grid) == before


def test_singleton_invariant_holds_for_random_paint_sequences():
    rng = random.Random(1234)
    grid = _grid(5, 4)
    roles = [CellRole.EMPTY, CellRole.BLOCKED, CellRole.START, CellRole.END]
    for _ in range(500):
        grid.set_role(rng.randrange(4), rng.randrange(5), rng.choice(roles))
        assert len(grid.positions_with(CellRole.START)) <= 1
        assert len(grid.positions_with(CellRole.END)) <= 1
        grid.check_invariants()


def test_costs_survive_role_changes():
    grid = _grid()
    costs = [c.cost for c in grid.cells]
    grid.set_role(0, 0, CellRole.START)
    grid.set_role(0, 1, CellRole.BLOCKED)
    grid.set_role(0, 0, CellRole.EMPTY)
    assert [c.cost for c in grid.cells] == costs


def test_clear_overlay_only_touches_path_cells():
    grid = _grid()
    grid.set_role(0, 0, CellRole.START)
    grid.set_role(0, 2, CellRole.END)
    grid.set_role(1, 1, CellRole.BLOCKED)

    marked = grid.mark_path([(0, 0), (0, 1), (1, 1), (0, 2)])
    assert marked == [(0, 1)]

    assert grid.clear_overlay() == [(0, 1)]
    assert grid.role_at(0, 1) == CellRole.EMPTY
    assert grid.role_at(1, 1) == CellRole.BLOCKED
    assert grid.start == (0, 0) and grid.end == (0, 2)
    assert grid.clear_overlay() == []


def test_clear_keeps_costs_and_drops_endpoints():
    grid = _grid()
    costs = [c.cost for c in grid.cells]
    grid.set_role(0, 0, CellRole.START)
    grid.set_role(2, 1, CellRole.BLOCKED)

    touched = grid.clear()

    assert sorted(touched) == [(0, 0), (2, 1)]
    assert [c.cost for c in grid.cells] == costs
    assert grid.start is None
    grid.check_invariants()


def test_randomize_blocks_respects_density_extremes():
    grid = _grid(4, 4)
    grid.set_role(0, 0, CellRole.START)
    grid.randomize_blocks(1.0, rng=random.Random(3))
    assert all(c.role == CellRole.BLOCKED for c in grid.cells)
    assert grid.start is None

    grid.randomize_blocks(0.0, rng=random.Random(3))
    assert all(c.role == CellRole.EMPTY for c in grid.cells)


def test_invariant_check_reports_stale_endpoint_cache():
    grid = _grid()
    grid.set_role(1, 1, CellRole.START)
    grid.cells[4].role = CellRole.EMPTY
    with pytest.raises(GridInvariantError):
        grid.check_invariants()


def test_invariant_check_reports_duplicate_end():
    grid = _grid()
    grid.set_role(0, 0, CellRole.END)
    grid.cells[8].role = CellRole.END
    with pytest.raises(GridInvariantError):
        grid.check_invariants()
