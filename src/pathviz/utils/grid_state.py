from __future__ import annotations

from esper import World

from pathviz.components.editor_state import EditorState
from pathviz.components.grid import Grid
from pathviz.components.grid_settings import GridSettings
from pathviz.components.notice import NoticeState
from pathviz.components.run_state import RunSettings


def _singleton(world: World, component_type):
    for _, comp in world.get_component(component_type):
        return comp
    raise RuntimeError(f"{component_type.__name__} not found in world")


def get_grid(world: World) -> Grid:
    return _singleton(world, Grid)


def get_editor_state(world: World) -> EditorState:
    return _singleton(world, EditorState)


def get_grid_settings(world: World) -> GridSettings:
    return _singleton(world, GridSettings)


def get_run_settings(world: World) -> RunSettings:
    return _singleton(world, RunSettings)


def get_notice(world: World) -> NoticeState:
    return _singleton(world, NoticeState)
