"""Grid lifecycle: reset on size change, clear, and random blockage."""
from __future__ import annotations

import logging
import random

from esper import World

from pathviz.components.run_state import RunPhase
from pathviz.constants import (
    MAX_CELL_SIZE,
    MAX_GRID_SIZE,
    MIN_CELL_SIZE,
    MIN_GRID_SIZE,
    RANDOM_BLOCK_DENSITY,
)
from pathviz.errors import InvalidDimension
from pathviz.events.bus import (
    EVENT_CELL_SIZE_CHANGED,
    EVENT_GRID_CHANGED,
    EVENT_GRID_CLEAR_REQUEST,
    EVENT_GRID_RANDOMIZE_REQUEST,
    EVENT_GRID_RESET,
    EVENT_GRID_RESET_REQUEST,
    EventBus,
)
from pathviz.utils.grid_state import get_grid, get_grid_settings
from pathviz.utils.run_state import current_phase, dismiss_result

logger = logging.getLogger(__name__)


class GridSystem:
    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_GRID_RESET_REQUEST, self.on_reset_request)
        self.event_bus.subscribe(EVENT_GRID_CLEAR_REQUEST, self.on_clear_request)
        self.event_bus.subscribe(EVENT_GRID_RANDOMIZE_REQUEST, self.on_randomize_request)
        self.event_bus.subscribe(EVENT_CELL_SIZE_CHANGED, self.on_cell_size_changed)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_reset_request(self, sender, **kwargs):
        settings = get_grid_settings(self.world)
        width = kwargs.get('width', settings.width)
        height = kwargs.get('height', settings.height)
        try:
            width = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(width)))
            height = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(height)))
        except (TypeError, ValueError):
            logger.debug("Ignoring reset request with size %r x %r", width, height)
            return
        self.reset(width, height)

    def on_clear_request(self, sender, **kwargs):
        self.clear()

    def on_randomize_request(self, sender, **kwargs):
        density = kwargs.get('density')
        if density is None:
            density = RANDOM_BLOCK_DENSITY
        self.randomize(float(density))

    def on_cell_size_changed(self, sender, **kwargs):
        try:
            cell_size = int(kwargs.get('cell_size'))
        except (TypeError, ValueError):
            return
        settings = get_grid_settings(self.world)
        settings.cell_size = max(MIN_CELL_SIZE, min(MAX_CELL_SIZE, cell_size))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def reset(self, width: int, height: int) -> bool:
        """Replace the grid with fresh Empty cells; InvalidDimension propagates."""
        if width < 1 or height < 1:
            raise InvalidDimension(f"Grid dimensions must be >= 1, got {width}x{height}")
        if not self._editable():
            return False
        grid = get_grid(self.world)
        grid.reset(width, height, rng=self._rng)
        settings = get_grid_settings(self.world)
        settings.width = width
        settings.height = height
        logger.info("Grid reset to %dx%d", width, height)
        self.event_bus.emit(EVENT_GRID_RESET, width=width, height=height)
        return True

    def clear(self) -> bool:
        if not self._editable():
            return False
        touched = get_grid(self.world).clear()
        if touched:
            self.event_bus.emit(EVENT_GRID_CHANGED, positions=touched, reason="cleared")
        return True

    def randomize(self, density: float) -> bool:
        if not self._editable():
            return False
        density = max(0.0, min(1.0, density))
        touched = get_grid(self.world).randomize_blocks(density, rng=self._rng)
        if touched:
            self.event_bus.emit(EVENT_GRID_CHANGED, positions=touched, reason="randomized")
        return True

    def _editable(self) -> bool:
        phase = current_phase(self.world)
        if phase == RunPhase.SOLVING:
            logger.debug("Grid command ignored while solving")
            return False
        if phase == RunPhase.SHOWING_RESULT:
            dismiss_result(self.world, self.event_bus)
        return True
