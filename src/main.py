"""Entry point for the Dots connect-the-circles prototype.

Sets up logging, ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from rich.logging import RichHandler

from dots.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from dots.events.bus import (
    EventBus,
    EVENT_MENU_EXIT_SELECTED,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_MOVE,
    EVENT_POINTER_UP,
    EVENT_TICK,
)
from dots.menu.factory import menu_visible
from dots.menu.input_system import MenuInputSystem
from dots.menu.render_system import MenuRenderSystem
from dots.systems.animation import AnimationSystem
from dots.systems.chain import ChainSystem
from dots.systems.clear_resolution import ClearResolutionSystem
from dots.systems.input import InputSystem
from dots.systems.render import RenderSystem
from dots.systems.round import RoundSystem
from dots.systems.score import ScoreSystem
from dots.world import create_world


class DotsWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Dots")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Round flow
        self.round_system = RoundSystem(
            self.world,
            self.event_bus,
            menu_size_provider=lambda: (self.width, self.height),
        )
        self.chain_system = ChainSystem(self.world, self.event_bus)
        self.score_system = ScoreSystem(self.world, self.event_bus)

        # Board and animation systems
        self.clear_resolution_system = ClearResolutionSystem(self.world, self.event_bus)
        self.animation_system = AnimationSystem(self.world, self.event_bus)

        # Interface systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.menu_input_system = MenuInputSystem(self.world, self.event_bus)
        self.menu_render_system = MenuRenderSystem(self.world, self)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        self.event_bus.subscribe(EVENT_MENU_EXIT_SELECTED, self.on_exit_selected)
        self.round_system.show_title_menu()
        set_background_color(color.WHITE)

    def on_draw(self):
        self.clear()
        self.render_system.process()
        if menu_visible(self.world):
            self.menu_render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        # Menu clicks never reach the board.
        if menu_visible(self.world):
            self.menu_input_system.handle_mouse_press(x, y)
            return
        self.event_bus.emit(EVENT_POINTER_DOWN, x=x, y=y, button=button)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.event_bus.emit(EVENT_POINTER_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self.event_bus.emit(EVENT_POINTER_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_POINTER_UP, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if menu_visible(self.world):
            self.menu_input_system.handle_key_press(symbol, modifiers)

    def on_exit_selected(self, sender, **kwargs):
        self.close()


def main():
    logging.basicConfig(
        level="INFO",
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler()],
    )
    DotsWindow()
    run()


if __name__ == "__main__":
    main()
