import random

import pytest

from pathviz.components.cell_role import CellRole
from pathviz.components.grid import Grid
from pathviz.errors import BackendUnavailable, MalformedGrid
from pathviz.pathfinding.contract import PathRequest, decode_response

E, B, S, T = CellRole.EMPTY, CellRole.BLOCKED, CellRole.START, CellRole.END


def _request(roles, width, costs=None):
    return PathRequest(roles=tuple(roles), costs=tuple(costs or [1] * len(roles)), width=width)


def test_request_from_grid_is_row_major_snapshot():
    grid = Grid.create(3, 2, rng=random.Random(5))
    grid.set_role(0, 2, CellRole.START)
    grid.set_role(1, 0, CellRole.END)

    request = PathRequest.from_grid(grid, "a-star")

    assert request.width == 3 and request.height == 2
    assert request.role_of(0, 2) == S and request.role_of(1, 0) == T
    assert request.cost_of(1, 2) == grid.cost_at(1, 2)
    assert request.start == (0, 2) and request.end == (1, 0)
    assert request.algorithm == "a-star"


def test_payload_uses_symbolic_codes():
    request = _request([S, E, B, T], 2, costs=[1, 2, 3, 4])
    payload = request.to_payload()
    assert payload == {
        "cell_roles": ["S", "E", "B", "T"],
        "costs": [1, 2, 3, 4],
        "width": 2,
        "algorithm": "dijkstra",
    }
    assert PathRequest.from_payload(payload) == request


@pytest.mark.parametrize(
    "roles,costs,width",
    [
        ([E] * 5, [1] * 5, 2),
        ([E] * 4, [1] * 3, 2),
        ([E] * 4, [1] * 4, 0),
        ([], [], 1),
    ],
)
def test_non_rectangular_grids_rejected(roles, costs, width):
    with pytest.raises(MalformedGrid):
        PathRequest(roles=tuple(roles), costs=tuple(costs), width=width)


def test_payload_with_unknown_code_rejected():
    with pytest.raises(MalformedGrid):
        PathRequest.from_payload({"cell_roles": ["white"], "costs": [1], "width": 1})


def test_empty_response_means_unreachable():
    request = _request([S, B, T], 3)
    response = decode_response([], request)
    assert not response.reachable
    assert response.intermediate == ()


def test_valid_response_reports_cost_and_intermediate_cells():
    request = _request([S, E, E, T], 4, costs=[9, 2, 3, 4])
    response = decode_response([[0, 0], [0, 1], [0, 2], [0, 3]], request)
    assert response.path == ((0, 0), (0, 1), (0, 2), (0, 3))
    assert response.intermediate == ((0, 1), (0, 2))
    assert response.cost == 9


@pytest.mark.parametrize(
    "raw",
    [
        [(0, 1), (0, 2), (0, 3)],          # does not start on Start
        [(0, 0), (0, 1), (0, 2)],          # does not end on End
        [(0, 0), (0, 2), (0, 3)],          # jumps a cell
        [(0, 0), (1, 0), (0, 3)],          # leaves the grid
        [(0, 0), "x"],                     # unreadable
        [(0, 0), (0.9, 1), (0, 2), (0, 3)],  # fractional coordinate
        [(0, 0), {"row": 0}],              # mapping instead of a pair
        None,
    ],
)
def test_invalid_responses_are_backend_faults(raw):
    request = _request([S, E, E, T], 4)
    with pytest.raises(BackendUnavailable):
        decode_response(raw, request)


def test_response_through_blocked_cell_rejected():
    request = _request([S, B, T], 3)
    with pytest.raises(BackendUnavailable):
        decode_response([(0, 0), (0, 1), (0, 2)], request)
