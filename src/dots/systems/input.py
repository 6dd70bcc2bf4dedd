from dots.events.bus import (
    EventBus,
    EVENT_GESTURE_RELEASED,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_MOVE,
    EVENT_POINTER_UP,
    EVENT_TOKEN_TOUCHED,
)
from dots.components.round_state import RoundPhase
from dots.systems.clear_resolution import refill_pending
from dots.systems.state_utils import get_or_create_pointer_state, get_round_state
from dots.ui.layout import compute_board_geometry, token_at_point


class InputSystem:
    """Turns raw pointer events into token touches and gesture releases.

    A gesture only starts on a press made while the round runs and no refill is
    pending. Moves during that gesture hit-test the cursor against the board.
    """
    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_POINTER_DOWN, self.on_pointer_down)
        self.event_bus.subscribe(EVENT_POINTER_MOVE, self.on_pointer_move)
        self.event_bus.subscribe(EVENT_POINTER_UP, self.on_pointer_up)

    def on_pointer_down(self, sender, **kwargs):
        x = kwargs.get('x'); y = kwargs.get('y')
        if x is None or y is None:
            return
        if not self._round_running():
            return
        pointer = get_or_create_pointer_state(self.world)
        pointer.x, pointer.y = float(x), float(y)
        pointer.down = True
        pointer.last_touched = None
        pointer.gesture_active = not refill_pending(self.world)
        if pointer.gesture_active:
            self._hit_test(pointer)

    def on_pointer_move(self, sender, **kwargs):
        x = kwargs.get('x'); y = kwargs.get('y')
        if x is None or y is None:
            return
        pointer = get_or_create_pointer_state(self.world)
        pointer.x, pointer.y = float(x), float(y)
        if not (pointer.down and pointer.gesture_active and self._round_running()):
            return
        self._hit_test(pointer)

    def on_pointer_up(self, sender, **kwargs):
        pointer = get_or_create_pointer_state(self.world)
        was_active = pointer.gesture_active
        pointer.down = False
        pointer.gesture_active = False
        pointer.last_touched = None
        if was_active and self._round_running():
            self.event_bus.emit(EVENT_GESTURE_RELEASED)

    def _hit_test(self, pointer):
        geometry = compute_board_geometry(self.world, self.window.width, self.window.height)
        entity = token_at_point(self.world, geometry, pointer.x, pointer.y)
        if entity is None:
            pointer.last_touched = None
            return
        # The overlap keeps firing while the cursor rests on a circle; report it once.
        if entity == pointer.last_touched:
            return
        pointer.last_touched = entity
        self.event_bus.emit(EVENT_TOKEN_TOUCHED, entity=entity)

    def _round_running(self) -> bool:
        state = get_round_state(self.world)
        return state.phase is RoundPhase.RUNNING and not state.input_frozen
