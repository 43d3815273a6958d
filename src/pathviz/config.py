"""Runtime configuration read from ``PATHVIZ_*`` environment variables."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from pathviz.constants import (
    ALGORITHMS,
    CELL_SIZE,
    DEFAULT_ALGORITHM,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_CELL_SIZE,
    MAX_GRID_SIZE,
    MIN_CELL_SIZE,
    MIN_GRID_SIZE,
    NOTICE_SECONDS,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read an int; missing, blank or unparsable values give ``default``."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except (ValueError, TypeError):
        logger.warning("Ignoring %s=%r (not an integer)", name, raw)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except (ValueError, TypeError):
        logger.warning("Ignoring %s=%r (not a number)", name, raw)
        return default


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class VisualizerConfig:
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    cell_size: int = CELL_SIZE
    algorithm: str = DEFAULT_ALGORITHM
    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT
    notice_seconds: float = NOTICE_SECONDS
    seed: int | None = None


def load_config() -> VisualizerConfig:
    algorithm = (os.getenv("PATHVIZ_ALGORITHM") or DEFAULT_ALGORITHM).strip().lower()
    if algorithm not in ALGORITHMS:
        logger.warning("Unknown algorithm %r, using %s", algorithm, DEFAULT_ALGORITHM)
        algorithm = DEFAULT_ALGORITHM
    seed_raw = os.getenv("PATHVIZ_SEED")
    seed = _env_int("PATHVIZ_SEED", 0) if seed_raw and seed_raw.strip() else None
    return VisualizerConfig(
        grid_width=_clamp(_env_int("PATHVIZ_GRID_WIDTH", GRID_WIDTH), MIN_GRID_SIZE, MAX_GRID_SIZE),
        grid_height=_clamp(_env_int("PATHVIZ_GRID_HEIGHT", GRID_HEIGHT), MIN_GRID_SIZE, MAX_GRID_SIZE),
        cell_size=_clamp(_env_int("PATHVIZ_CELL_SIZE", CELL_SIZE), MIN_CELL_SIZE, MAX_CELL_SIZE),
        algorithm=algorithm,
        window_width=_env_int("PATHVIZ_WINDOW_WIDTH", WINDOW_WIDTH),
        window_height=_env_int("PATHVIZ_WINDOW_HEIGHT", WINDOW_HEIGHT),
        notice_seconds=max(0.0, _env_float("PATHVIZ_NOTICE_SECONDS", NOTICE_SECONDS)),
        seed=seed,
    )
