import random

from esper import World

from pathviz.components.editor_state import EditorState, EditTool
from pathviz.components.grid import Grid
from pathviz.components.grid_settings import GridSettings
from pathviz.components.notice import NoticeState
from pathviz.components.run_state import RunSettings, RunState
from pathviz.config import VisualizerConfig
from pathviz.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    config: VisualizerConfig | None = None,
    *,
    tool: EditTool = EditTool.BLOCKED,
    rng: random.Random | None = None,
) -> World:
    """Build the world holding the single state entity every system reads.

    ``event_bus`` is accepted for symmetry with the systems; nothing is emitted
    while the world is assembled.
    """
    config = config or VisualizerConfig()
    world = World()
    if rng is None:
        rng = random.Random(config.seed) if config.seed is not None else random.Random()
    setattr(world, "random", rng)

    world.create_entity(
        Grid.create(config.grid_width, config.grid_height, rng=rng),
        GridSettings(
            width=config.grid_width,
            height=config.grid_height,
            cell_size=config.cell_size,
        ),
        EditorState(tool=tool),
        RunState(),
        RunSettings(algorithm=config.algorithm),
        NoticeState(),
    )
    return world
