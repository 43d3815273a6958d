"""Run/result lifecycle state shared by the editor, run system and renderer."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from pathviz.constants import DEFAULT_ALGORITHM


class RunPhase(Enum):
    """Ready accepts edits and runs; Solving waits on the service; ShowingResult displays the overlay."""
    READY = auto()
    SOLVING = auto()
    SHOWING_RESULT = auto()


@dataclass(slots=True)
class RunState:
    phase: RunPhase = RunPhase.READY
    last_path_length: Optional[int] = None
    last_path_cost: Optional[int] = None


@dataclass(slots=True)
class RunSettings:
    """Algorithm choice supplied by the control surface."""
    algorithm: str = DEFAULT_ALGORITHM
