"""Input handling for the ECS-driven round menu."""
from esper import World

from dots.components.round_state import RoundPhase
from dots.events.bus import (
    EVENT_MENU_EXIT_SELECTED,
    EVENT_MENU_START_SELECTED,
    EVENT_POINTER_MOVE,
    EventBus,
)
from dots.menu.components import MenuAction, MenuButton
from dots.systems.state_utils import get_round_state


class MenuInputSystem:
    """Processes pointer and key input while the menu is shown between rounds.

    Presses reach it directly from the window so a click on a button never
    doubles as the first touch of a new round.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self._event_bus = event_bus
        event_bus.subscribe(EVENT_POINTER_MOVE, self.on_pointer_move)

    def on_pointer_move(self, sender, **payload) -> None:
        x = payload.get("x")
        y = payload.get("y")
        if x is None or y is None:
            return
        for _, menu_button in self.world.get_component(MenuButton):
            menu_button.hovered = self._point_inside_button(float(x), float(y), menu_button)

    def handle_mouse_press(self, x: float, y: float) -> None:
        """Handle clicks; start a round or exit when a button is hit."""
        if not self._menu_active():
            return
        for _, menu_button in self.world.get_component(MenuButton):
            if not menu_button.enabled:
                continue
            if self._point_inside_button(x, y, menu_button):
                self._activate_action(menu_button.action)
                return

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        """Allow keyboard activation using the Enter key."""
        if not self._menu_active():
            return
        # arcade.key.ENTER == 65293, but we avoid direct import to keep loose coupling.
        if symbol in (65293, 13):
            self._activate_action(MenuAction.START)

    def _activate_action(self, action: MenuAction) -> None:
        if action == MenuAction.START:
            self._event_bus.emit(EVENT_MENU_START_SELECTED)
        elif action == MenuAction.EXIT:
            self._event_bus.emit(EVENT_MENU_EXIT_SELECTED)

    def _menu_active(self) -> bool:
        return get_round_state(self.world).phase is not RoundPhase.RUNNING

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
