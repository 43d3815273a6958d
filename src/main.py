"""Entry point for the pathviz grid pathfinding visualizer.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging
import os

from arcade import Window, run, set_background_color, color

from pathviz.config import VisualizerConfig, load_config
from pathviz.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_TICK,
    EventBus,
)
from pathviz.pathfinding.client import PathfindingClient
from pathviz.systems.editor import EditorSystem
from pathviz.systems.grid_system import GridSystem
from pathviz.systems.input import InputSystem
from pathviz.systems.notification_system import NotificationSystem
from pathviz.systems.render import RenderSystem
from pathviz.systems.run_system import RunSystem
from pathviz.world import create_world


class PathvizWindow(Window):
    def __init__(self, config: VisualizerConfig):
        super().__init__(config.window_width, config.window_height, "Pathfinder", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, config)
        self.client = PathfindingClient()

        # Grid and editing systems
        self.grid_system = GridSystem(self.world, self.event_bus)
        self.editor_system = EditorSystem(self.world, self.event_bus)

        # Run lifecycle and feedback
        self.run_system = RunSystem(self.world, self.event_bus, self.client)
        self.notification_system = NotificationSystem(
            self.world, self.event_bus, duration=config.notice_seconds
        )

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)

        set_background_color(color.DARK_SLATE_GRAY)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def on_close(self):
        self.client.shutdown()
        super().on_close()


def main():
    logging.basicConfig(
        level=os.getenv("PATHVIZ_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    window = PathvizWindow(load_config())
    run()

if __name__ == "__main__":
    main()
