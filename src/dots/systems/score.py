import logging
from typing import Optional

from esper import World

from dots.components.score_state import ScoreState
from dots.events.bus import (
    EventBus,
    EVENT_CHAIN_CHANGED,
    EVENT_CLEAR_ACCEPTED,
    EVENT_ROUND_STATE_CHANGED,
    EVENT_SCORE_CHANGED,
)
from dots.systems.state_utils import get_config, get_score_state, get_selection_chain
from dots.utils.scoring import bonus_proportion, points_for_chain

logger = logging.getLogger(__name__)


class ScoreSystem:
    """Keeps the running total and the "points about to be added" preview."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CHAIN_CHANGED, self.on_chain_changed)
        self.event_bus.subscribe(EVENT_CLEAR_ACCEPTED, self.on_clear_accepted)
        self.event_bus.subscribe(EVENT_ROUND_STATE_CHANGED, self.on_round_state_changed)

    @property
    def state(self) -> ScoreState:
        return get_score_state(self.world)

    def on_chain_changed(self, sender, **kwargs):
        delta = kwargs.get('delta', 0)
        self.preview_delta(delta, kwargs.get('color'))

    def on_clear_accepted(self, sender, **kwargs):
        tokens = kwargs.get('tokens') or []
        length = kwargs.get('chain_length', len(tokens))
        self.commit(length, kwargs.get('color'))

    def preview_delta(self, delta: int, color: Optional[str]) -> int:
        state = self.state
        state.preview = max(0, state.preview + delta)
        state.preview_color = color if state.preview > 0 else None
        self._emit(awarded=0)
        return state.preview

    def preview_points(self) -> int:
        """Points the current chain would score; 0 means no preview to show."""
        chain = get_selection_chain(self.world)
        count = len(chain.clear_set) if chain.looped else self.state.preview
        return count if count > 1 else 0

    def bonus_proportion(self) -> float:
        return bonus_proportion(self.preview_points(), get_config(self.world).bonus_threshold)

    def commit(self, chain_length: int, color: Optional[str]) -> int:
        """Award points for a cleared chain and reset the preview."""
        state = self.state
        points = points_for_chain(chain_length, get_config(self.world).bonus_threshold)
        state.total += points
        state.last_awarded = points
        state.preview = 0
        state.preview_color = None
        logger.info("Cleared %d %s circles for %d points (total %d)", chain_length, color, points, state.total)
        self._emit(awarded=points, color=color)
        return points

    def on_round_state_changed(self, sender, **kwargs):
        # RoundSystem resets the totals itself; this only refreshes listeners.
        self._emit(awarded=0)

    def _emit(self, *, awarded: int, color: Optional[str] = None) -> None:
        state = self.state
        self.event_bus.emit(
            EVENT_SCORE_CHANGED,
            total=state.total,
            preview=state.preview,
            preview_points=self.preview_points(),
            color=color or state.preview_color,
            awarded=awarded,
        )
