from __future__ import annotations

import random
from concurrent.futures import Executor, Future
from typing import Sequence

from esper import World

from pathviz.components.cell_role import CellRole
from pathviz.components.editor_state import EditTool
from pathviz.config import VisualizerConfig
from pathviz.events.bus import EventBus
from pathviz.pathfinding.client import PathfindingClient
from pathviz.pathfinding.service import LocalPathfindingService
from pathviz.systems.editor import EditorSystem
from pathviz.systems.grid_system import GridSystem
from pathviz.systems.run_system import RunSystem
from pathviz.utils.grid_state import get_grid
from pathviz.world import create_world


class ImmediateExecutor(Executor):
    """Runs submitted work inline so the future is already resolved."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class ManualExecutor(Executor):
    """Holds submitted work until ``run_pending`` is called."""

    def __init__(self) -> None:
        self.jobs: list[tuple[Future, object, tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.jobs.append((future, fn, args, kwargs))
        return future

    def run_pending(self) -> None:
        jobs, self.jobs = self.jobs, []
        for future, fn, args, kwargs in jobs:
            try:
                future.set_result(fn(*args, **kwargs))
            except Exception as exc:
                future.set_exception(exc)


class ScriptedService:
    """Pathfinding service double returning a fixed answer and recording calls."""

    def __init__(self, path: Sequence[tuple[int, int]] | None = None, error: Exception | None = None):
        self.path = list(path or [])
        self.error = error
        self.calls: list[dict] = []

    def find_path(self, cell_roles, costs, width, algorithm="dijkstra"):
        self.calls.append(
            {"cell_roles": list(cell_roles), "costs": list(costs), "width": width, "algorithm": algorithm}
        )
        if self.error is not None:
            raise self.error
        return list(self.path)


class EventCapture:
    def __init__(self, bus: EventBus, name: str):
        self.received: list[dict] = []
        bus.subscribe(name, self.on_event)

    def on_event(self, sender, **payload):
        self.received.append(payload)

    @property
    def count(self) -> int:
        return len(self.received)


def build_world(width: int = 3, height: int = 3, *, tool: EditTool = EditTool.BLOCKED, seed: int = 0):
    bus = EventBus()
    config = VisualizerConfig(grid_width=width, grid_height=height)
    world = create_world(bus, config, tool=tool, rng=random.Random(seed))
    return bus, world


def uniform_costs(world: World, cost: int = 1) -> None:
    for cell in get_grid(world).cells:
        cell.cost = cost


def build_systems(world: World, bus: EventBus, *, service=None, executor: Executor | None = None):
    """Wire editor, grid and run systems around a client with an inline executor by default."""
    client = PathfindingClient(service or LocalPathfindingService(), executor=executor or ImmediateExecutor())
    editor = EditorSystem(world, bus)
    grid_system = GridSystem(world, bus)
    run_system = RunSystem(world, bus, client)
    return editor, grid_system, run_system


def role_layout(world: World) -> list[CellRole]:
    return [cell.role for cell in get_grid(world).cells]
