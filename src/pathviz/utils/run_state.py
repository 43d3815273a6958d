from __future__ import annotations

import logging

from esper import World

from pathviz.components.run_state import RunPhase, RunState
from pathviz.events.bus import EVENT_GRID_CHANGED, EVENT_RUN_PHASE_CHANGED, EventBus
from pathviz.utils.grid_state import get_grid

logger = logging.getLogger(__name__)


def get_run_state(world: World) -> RunState:
    for _, state in world.get_component(RunState):
        return state
    raise RuntimeError("RunState not found in world")


def current_phase(world: World) -> RunPhase:
    return get_run_state(world).phase


def set_run_phase(world: World, event_bus: EventBus, phase: RunPhase) -> None:
    """Update the lifecycle phase and emit a change event when it differs."""
    state = get_run_state(world)
    previous = state.phase
    if previous == phase:
        return
    state.phase = phase
    logger.debug("Run phase %s -> %s", previous.name, phase.name)
    event_bus.emit(EVENT_RUN_PHASE_CHANGED, previous_phase=previous, new_phase=phase)


def dismiss_result(world: World, event_bus: EventBus) -> bool:
    """Clear the path overlay and return to Ready; only valid while showing a result."""
    if current_phase(world) != RunPhase.SHOWING_RESULT:
        return False
    touched = get_grid(world).clear_overlay()
    if touched:
        event_bus.emit(EVENT_GRID_CHANGED, positions=touched, reason="overlay_cleared")
    set_run_phase(world, event_bus, RunPhase.READY)
    return True
