"""Round lifecycle: idle -> running -> ended -> idle."""
from __future__ import annotations

import logging
import random
from typing import Callable

from esper import World

from dots.components.clear_latch import ClearLatch
from dots.components.round_state import RoundPhase, RoundState, RoundSummary
from dots.errors import InvalidStateError
from dots.events.bus import (
    EventBus,
    EVENT_BOARD_RESET,
    EVENT_MENU_START_SELECTED,
    EVENT_ROUND_STATE_CHANGED,
    EVENT_TICK,
)
from dots.menu.factory import clear_menu, spawn_round_menu
from dots.systems.board_ops import clear_board, fill_board
from dots.systems.state_utils import (
    get_config,
    get_or_create_pointer_state,
    get_round_state,
    get_score_state,
    get_selection_chain,
)

logger = logging.getLogger(__name__)


class RoundSystem:
    """Owns the countdown, the round reset and the high score.

    The countdown advances on ``EVENT_TICK``. When it runs out, input freezes,
    the high score is updated, the board and chain are cleared and the
    end-of-round menu is spawned. A new round starts from the menu.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
        menu_size_provider: Callable[[], tuple[float, float]] | None = None,
        spawn_menus: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng
        self._menu_size_provider = menu_size_provider
        self._spawn_menus = spawn_menus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_MENU_START_SELECTED, self.on_menu_start_selected)

    @property
    def state(self) -> RoundState:
        return get_round_state(self.world)

    def show_title_menu(self) -> None:
        self._spawn_menu("Connect Dots", "Score Points", "Start Game!")

    def on_menu_start_selected(self, sender, **payload) -> None:
        if self.state.phase is RoundPhase.RUNNING:
            return
        self.start_round()

    def on_tick(self, sender, **payload) -> None:
        state = self.state
        if state.phase is not RoundPhase.RUNNING:
            return
        dt = payload.get('dt', 1/60)
        try:
            state.elapsed += float(dt)
        except (TypeError, ValueError):
            return
        if state.elapsed >= state.duration:
            self.end_round()

    def start_round(self) -> None:
        """Reset score, selection and board and arm the countdown."""
        state = self.state
        if state.phase is RoundPhase.RUNNING:
            raise InvalidStateError("A round is already running")
        if state.phase is RoundPhase.ENDED:
            self._set_phase(RoundPhase.IDLE)
        clear_menu(self.world)
        score = get_score_state(self.world)
        score.total = 0
        score.preview = 0
        score.preview_color = None
        score.last_awarded = 0
        self._reset_selection()
        self._drop_latches()
        fill_board(self.world, self._rng)
        self.event_bus.emit(EVENT_BOARD_RESET, reason="round_start")
        state.duration = get_config(self.world).round_duration
        state.elapsed = 0.0
        state.summary = None
        state.input_frozen = False
        logger.info("Round started (%.1fs)", state.duration)
        self._set_phase(RoundPhase.RUNNING)

    def end_round(self) -> RoundSummary:
        """Stop the round, snapshot the high score and present the summary."""
        state = self.state
        if state.phase is not RoundPhase.RUNNING:
            raise InvalidStateError("No round is running")
        state.elapsed = state.duration
        state.input_frozen = True
        score = get_score_state(self.world)
        new_high = score.total > score.high_score
        if new_high:
            score.high_score = score.total
        score.preview = 0
        score.preview_color = None
        summary = RoundSummary(score=score.total, high_score=score.high_score, new_high_score=new_high)
        state.summary = summary
        self._reset_selection()
        self._drop_latches()
        clear_board(self.world)
        self.event_bus.emit(EVENT_BOARD_RESET, reason="round_end")
        logger.info("Round ended: score %d, high score %d", summary.score, summary.high_score)
        self._set_phase(RoundPhase.ENDED, summary=summary)
        self._spawn_menu(f"Last Score: {summary.score}", f"High Score {summary.high_score}", "Try Again?!")
        return summary

    def _reset_selection(self) -> None:
        get_selection_chain(self.world).reset()
        pointer = get_or_create_pointer_state(self.world)
        pointer.down = False
        pointer.gesture_active = False
        pointer.last_touched = None

    def _drop_latches(self) -> None:
        for ent in [ent for ent, _ in self.world.get_component(ClearLatch)]:
            self.world.delete_entity(ent, immediate=True)

    def _set_phase(self, phase: RoundPhase, *, summary: RoundSummary | None = None) -> None:
        state = self.state
        previous = state.phase
        state.phase = phase
        self.event_bus.emit(EVENT_ROUND_STATE_CHANGED, previous=previous, phase=phase, summary=summary)

    def _spawn_menu(self, subtitle: str, subtitle2: str, button_label: str) -> None:
        if not self._spawn_menus:
            return
        width, height = self._menu_size()
        spawn_round_menu(self.world, width, height, subtitle=subtitle, subtitle2=subtitle2, button_label=button_label)

    def _menu_size(self) -> tuple[float, float]:
        if self._menu_size_provider is not None:
            try:
                width, height = self._menu_size_provider()
                return float(width), float(height)
            except (TypeError, ValueError):
                pass
        from dots.constants import WINDOW_HEIGHT, WINDOW_WIDTH
        return float(WINDOW_WIDTH), float(WINDOW_HEIGHT)
