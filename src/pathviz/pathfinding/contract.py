"""Request/response shapes exchanged with the pathfinding service.

The request is an immutable snapshot of the grid taken at submission time: one
role code and one cost per cell in row-major order, plus the grid width. The
response is a list of ``(row, col)`` from Start to End inclusive, or empty when
End cannot be reached.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from pathviz.components.cell_role import CellRole
from pathviz.components.grid import Grid, Pos
from pathviz.constants import DEFAULT_ALGORITHM
from pathviz.errors import BackendUnavailable, MalformedGrid


@dataclass(frozen=True)
class PathRequest:
    roles: Tuple[CellRole, ...]
    costs: Tuple[int, ...]
    width: int
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self) -> None:
        if self.width < 1:
            raise MalformedGrid(f"Grid width must be >= 1, got {self.width}")
        if not self.roles:
            raise MalformedGrid("Grid has no cells")
        if len(self.roles) != len(self.costs):
            raise MalformedGrid(
                f"{len(self.roles)} roles but {len(self.costs)} costs"
            )
        if len(self.roles) % self.width != 0:
            raise MalformedGrid(
                f"{len(self.roles)} cells do not divide evenly into rows of {self.width}"
            )

    @classmethod
    def from_grid(cls, grid: Grid, algorithm: str = DEFAULT_ALGORITHM) -> "PathRequest":
        return cls(
            roles=tuple(cell.role for cell in grid.cells),
            costs=tuple(cell.cost for cell in grid.cells),
            width=grid.width,
            algorithm=algorithm,
        )

    @property
    def height(self) -> int:
        return len(self.roles) // self.width

    def role_of(self, row: int, col: int) -> CellRole:
        return self.roles[row * self.width + col]

    def cost_of(self, row: int, col: int) -> int:
        return self.costs[row * self.width + col]

    def _find(self, role: CellRole) -> Optional[Pos]:
        for idx, candidate in enumerate(self.roles):
            if candidate == role:
                return divmod(idx, self.width)
        return None

    @property
    def start(self) -> Optional[Pos]:
        return self._find(CellRole.START)

    @property
    def end(self) -> Optional[Pos]:
        return self._find(CellRole.END)

    def to_payload(self) -> Dict[str, Any]:
        """Wire form: ``{cell_roles, costs, width, algorithm}``."""
        return {
            "cell_roles": [role.code for role in self.roles],
            "costs": list(self.costs),
            "width": self.width,
            "algorithm": self.algorithm,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PathRequest":
        try:
            roles = tuple(CellRole.from_code(code) for code in payload["cell_roles"])
            costs = tuple(int(cost) for cost in payload["costs"])
            width = int(payload["width"])
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedGrid(f"Invalid grid payload: {exc}") from exc
        return cls(
            roles=roles,
            costs=costs,
            width=width,
            algorithm=str(payload.get("algorithm") or DEFAULT_ALGORITHM),
        )


@dataclass(frozen=True)
class PathResponse:
    path: Tuple[Pos, ...] = ()
    cost: int = 0

    @property
    def reachable(self) -> bool:
        return bool(self.path)

    @property
    def intermediate(self) -> Tuple[Pos, ...]:
        """Cells between Start and End; these receive the overlay."""
        return self.path[1:-1]


def _coordinates(step: Sequence[int]) -> Pos:
    row, col = step[0], step[1]
    # bool is an int subclass; neither it nor a float is a cell index.
    for value in (row, col):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"non-integer coordinate {value!r} in step {step!r}")
    return row, col


def decode_response(raw: Iterable[Sequence[int]] | None, request: PathRequest) -> PathResponse:
    """Validate a raw coordinate list against the request snapshot.

    A non-empty path must start on the snapshot's Start, end on its End, stay in
    bounds and move between 4-neighbours.
    """
    if raw is None:
        raise BackendUnavailable("Pathfinding service returned no result")
    try:
        path = tuple(_coordinates(step) for step in raw)
    except (TypeError, ValueError, IndexError, KeyError) as exc:
        raise BackendUnavailable(f"Unreadable path from service: {exc}") from exc
    if not path:
        return PathResponse()

    height = request.height
    for row, col in path:
        if not (0 <= row < height and 0 <= col < request.width):
            raise BackendUnavailable(f"Path step ({row}, {col}) is outside the grid")
    if path[0] != request.start:
        raise BackendUnavailable(f"Path starts at {path[0]}, expected Start {request.start}")
    if path[-1] != request.end:
        raise BackendUnavailable(f"Path ends at {path[-1]}, expected End {request.end}")
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        if abs(r1 - r2) + abs(c1 - c2) != 1:
            raise BackendUnavailable(f"Path jumps from ({r1}, {c1}) to ({r2}, {c2})")
    for row, col in path[1:-1]:
        if request.role_of(row, col) == CellRole.BLOCKED:
            raise BackendUnavailable(f"Path crosses blocked cell ({row}, {col})")
    cost = sum(request.cost_of(row, col) for row, col in path[1:])
    return PathResponse(path=path, cost=cost)
