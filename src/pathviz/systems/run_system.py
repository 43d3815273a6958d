"""Run/result lifecycle: Ready -> Solving -> ShowingResult -> Ready."""
from __future__ import annotations

import logging
from concurrent.futures import CancelledError, Future
from typing import Optional

from esper import World

from pathviz.components.run_state import RunPhase
from pathviz.constants import (
    ALGORITHMS,
    MESSAGE_BACKEND_UNAVAILABLE,
    MESSAGE_MISSING_ENDPOINTS,
    MESSAGE_UNREACHABLE,
)
from pathviz.errors import BackendUnavailable, PreconditionError
from pathviz.events.bus import (
    EVENT_ALGORITHM_SELECTED,
    EVENT_GRID_CHANGED,
    EVENT_NOTIFY,
    EVENT_PATH_FOUND,
    EVENT_PATH_UNREACHABLE,
    EVENT_RUN_REQUESTED,
    EVENT_TICK,
    EventBus,
)
from pathviz.pathfinding.client import PathfindingClient
from pathviz.pathfinding.contract import PathRequest, PathResponse
from pathviz.utils.grid_state import get_grid, get_run_settings
from pathviz.utils.run_state import current_phase, get_run_state, set_run_phase

logger = logging.getLogger(__name__)


class RunSystem:
    """Owns the single in-flight request and applies its result to the grid.

    Responses are collected on ``tick`` so they are handled on the same thread
    as pointer input.
    """

    def __init__(self, world: World, event_bus: EventBus, client: PathfindingClient | None = None):
        self.world = world
        self.event_bus = event_bus
        self.client = client or PathfindingClient()
        self._pending: Optional[Future] = None
        self._pending_request: Optional[PathRequest] = None
        self.event_bus.subscribe(EVENT_RUN_REQUESTED, self.on_run_requested)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_ALGORITHM_SELECTED, self.on_algorithm_selected)

    @property
    def in_flight(self) -> bool:
        return self._pending is not None

    @property
    def pending_request(self) -> Optional[PathRequest]:
        return self._pending_request

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self) -> PathRequest:
        """Snapshot the grid and send it to the service.

        Raises PreconditionError outside Ready or when Start/End is missing, and
        BackendUnavailable when the request cannot be issued; the lifecycle stays
        in Ready in every failure case.
        """
        phase = current_phase(self.world)
        if phase != RunPhase.READY or self._pending is not None:
            raise PreconditionError(
                f"Cannot submit while {phase.name}", reason=PreconditionError.WRONG_PHASE
            )
        grid = get_grid(self.world)
        if grid.start is None or grid.end is None:
            raise PreconditionError(
                MESSAGE_MISSING_ENDPOINTS, reason=PreconditionError.MISSING_ENDPOINTS
            )
        request = PathRequest.from_grid(grid, get_run_settings(self.world).algorithm)
        future = self.client.request(request)
        self._pending = future
        self._pending_request = request
        logger.info(
            "Submitted %s run on %dx%d grid from %s to %s",
            request.algorithm, request.width, request.height, grid.start, grid.end,
        )
        set_run_phase(self.world, self.event_bus, RunPhase.SOLVING)
        return request

    def on_algorithm_selected(self, sender, **kwargs):
        algorithm = kwargs.get('algorithm')
        if algorithm not in ALGORITHMS:
            logger.debug("Ignoring unknown algorithm %r", algorithm)
            return
        get_run_settings(self.world).algorithm = algorithm
        logger.info("Algorithm -> %s", algorithm)

    def on_run_requested(self, sender, **kwargs):
        try:
            self.submit()
        except PreconditionError as exc:
            if exc.reason == PreconditionError.MISSING_ENDPOINTS:
                self._notify(MESSAGE_MISSING_ENDPOINTS, kind="warning")
            else:
                logger.debug("Run request ignored: %s", exc)
        except BackendUnavailable as exc:
            logger.warning("Could not submit run: %s", exc)
            self._notify(MESSAGE_BACKEND_UNAVAILABLE, kind="error")

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def on_tick(self, sender, **kwargs):
        self.poll()

    def poll(self) -> bool:
        """Apply the pending response if it has arrived; returns True when one was handled."""
        future = self._pending
        if future is None or not future.done():
            return False
        self._pending = None
        self._pending_request = None
        try:
            response = future.result()
        except BackendUnavailable as exc:
            self.fail(exc)
        except CancelledError:
            self.fail(BackendUnavailable("Pathfinding request was cancelled"))
        except Exception as exc:
            logger.exception("Unexpected failure in pathfinding request")
            self.fail(BackendUnavailable(str(exc) or type(exc).__name__))
        else:
            self.complete(response)
        return True

    def complete(self, response: PathResponse) -> None:
        """Apply a validated response; ignored unless Solving."""
        if current_phase(self.world) != RunPhase.SOLVING:
            logger.debug("Dropping response outside Solving")
            return
        state = get_run_state(self.world)
        if response.reachable:
            touched = get_grid(self.world).mark_path(response.intermediate)
            if touched:
                self.event_bus.emit(EVENT_GRID_CHANGED, positions=touched, reason="overlay")
            state.last_path_length = len(response.path)
            state.last_path_cost = response.cost
            logger.info("Path found: %d steps, cost %d", len(response.path), response.cost)
            self.event_bus.emit(EVENT_PATH_FOUND, path=list(response.path), cost=response.cost)
        else:
            state.last_path_length = None
            state.last_path_cost = None
            logger.info("End unreachable from Start")
            self._notify(MESSAGE_UNREACHABLE, kind="warning")
            self.event_bus.emit(EVENT_PATH_UNREACHABLE)
        set_run_phase(self.world, self.event_bus, RunPhase.SHOWING_RESULT)

    def fail(self, exc: BackendUnavailable) -> None:
        logger.warning("Pathfinding request failed: %s", exc)
        self._notify(MESSAGE_BACKEND_UNAVAILABLE, kind="error")
        set_run_phase(self.world, self.event_bus, RunPhase.READY)

    def _notify(self, message: str, *, kind: str) -> None:
        self.event_bus.emit(EVENT_NOTIFY, message=message, kind=kind)
