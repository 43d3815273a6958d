"""In-process pathfinding service used by the desktop app.

The visualizer treats this as an opaque backend: it only sees ``find_path``
taking the wire payload fields and returning a list of ``(row, col)``.
"""
from __future__ import annotations

import heapq
import logging
from collections import deque
from math import inf
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from pathviz.components.cell_role import CellRole
from pathviz.constants import DEFAULT_ALGORITHM
from pathviz.pathfinding.contract import PathRequest

logger = logging.getLogger(__name__)

Pos = Tuple[int, int]

# Neighbour order: left, right, up, down.
DIRECTIONS: Tuple[Pos, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


class PathfindingService(Protocol):
    def find_path(
        self,
        cell_roles: Sequence[str],
        costs: Sequence[int],
        width: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> List[Pos]:
        ...


class _SearchGrid:
    def __init__(self, request: PathRequest):
        self.request = request
        self.width = request.width
        self.height = request.height
        start = request.start
        end = request.end
        if start is None or end is None:
            raise ValueError("Grid needs both a Start and an End cell")
        self.start: Pos = start
        self.end: Pos = end

    def neighbors(self, pos: Pos) -> List[Pos]:
        row, col = pos
        out: List[Pos] = []
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.height and 0 <= nc < self.width:
                if self.request.role_of(nr, nc) != CellRole.BLOCKED:
                    out.append((nr, nc))
        return out

    def cost(self, pos: Pos) -> int:
        return self.request.cost_of(*pos)


def _reconstruct(parent: Dict[Pos, Pos], start: Pos, end: Pos) -> List[Pos]:
    path = [end]
    cur = end
    while cur != start:
        cur = parent[cur]
        path.append(cur)
    path.reverse()
    return path


def _weighted_search(grid: _SearchGrid, heuristic: Callable[[Pos], int]) -> Optional[List[Pos]]:
    """Dijkstra when ``heuristic`` is zero, A* otherwise; cost is paid on entering a cell."""
    g: Dict[Pos, float] = {grid.start: 0}
    parent: Dict[Pos, Pos] = {}
    seq = 0
    open_pq: List[Tuple[float, int, Pos]] = [(heuristic(grid.start), seq, grid.start)]
    closed: set = set()
    while open_pq:
        _, _, u = heapq.heappop(open_pq)
        if u in closed:
            continue
        if u == grid.end:
            return _reconstruct(parent, grid.start, grid.end)
        closed.add(u)
        for v in grid.neighbors(u):
            tentative = g[u] + grid.cost(v)
            if tentative < g.get(v, inf):
                g[v] = tentative
                parent[v] = u
                seq += 1
                heapq.heappush(open_pq, (tentative + heuristic(v), seq, v))
    return None


def dijkstra(grid: _SearchGrid) -> Optional[List[Pos]]:
    return _weighted_search(grid, lambda _pos: 0)


def a_star(grid: _SearchGrid) -> Optional[List[Pos]]:
    # Manhattan distance scaled by the cheapest cell keeps the heuristic admissible.
    min_cost = min(grid.request.costs) if grid.request.costs else 1
    end_r, end_c = grid.end

    def h(pos: Pos) -> int:
        return (abs(pos[0] - end_r) + abs(pos[1] - end_c)) * min_cost

    return _weighted_search(grid, h)


def bfs(grid: _SearchGrid) -> Optional[List[Pos]]:
    parent: Dict[Pos, Pos] = {}
    seen = {grid.start}
    queue = deque([grid.start])
    while queue:
        u = queue.popleft()
        if u == grid.end:
            return _reconstruct(parent, grid.start, grid.end)
        for v in grid.neighbors(u):
            if v not in seen:
                seen.add(v)
                parent[v] = u
                queue.append(v)
    return None


def dfs(grid: _SearchGrid) -> Optional[List[Pos]]:
    parent: Dict[Pos, Pos] = {}
    seen = {grid.start}
    stack = [grid.start]
    while stack:
        u = stack.pop()
        if u == grid.end:
            return _reconstruct(parent, grid.start, grid.end)
        for v in grid.neighbors(u):
            if v not in seen:
                seen.add(v)
                parent[v] = u
                stack.append(v)
    return None


ALGORITHM_REGISTRY: Dict[str, Callable[[_SearchGrid], Optional[List[Pos]]]] = {
    "dijkstra": dijkstra,
    "a-star": a_star,
    "bfs": bfs,
    "dfs": dfs,
}


class LocalPathfindingService:
    """Runs the requested search in the calling thread."""

    def find_path(
        self,
        cell_roles: Sequence[str],
        costs: Sequence[int],
        width: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> List[Pos]:
        try:
            search = ALGORITHM_REGISTRY[algorithm]
        except KeyError as exc:
            raise ValueError(f"Unknown algorithm '{algorithm}'") from exc
        request = PathRequest.from_payload(
            {"cell_roles": cell_roles, "costs": costs, "width": width, "algorithm": algorithm}
        )
        path = search(_SearchGrid(request))
        logger.debug("%s over %dx%d grid -> %s", algorithm, width, request.height,
                     f"{len(path)} steps" if path else "no path")
        return path or []
