"""Error taxonomy for grid editing, run submission and the pathfinding boundary."""
from __future__ import annotations


class PathvizError(Exception):
    """Base class for every recoverable pathviz failure."""


class InvalidDimension(PathvizError, ValueError):
    """Grid width or height below 1."""


class OutOfBounds(PathvizError, IndexError):
    """Cell coordinates outside the grid."""

    def __init__(self, row: int, col: int, width: int, height: int) -> None:
        super().__init__(f"Cell ({row}, {col}) is outside a {width}x{height} grid")
        self.row = row
        self.col = col


class PreconditionError(PathvizError):
    """A run was requested while Start/End are missing or the lifecycle is busy."""

    MISSING_ENDPOINTS = "missing_endpoints"
    WRONG_PHASE = "wrong_phase"

    def __init__(self, message: str, *, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class MalformedGrid(PathvizError, ValueError):
    """Serialized grid does not describe a rectangle."""


class BackendUnavailable(PathvizError, RuntimeError):
    """The pathfinding service could not be reached or answered with garbage."""


class GridInvariantError(PathvizError, RuntimeError):
    """Cached Start/End positions disagree with the cells, or a role appears twice."""
