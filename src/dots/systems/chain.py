import logging
from typing import List, Optional

from esper import World

from dots.components.round_state import RoundPhase
from dots.components.selection_chain import ChainState, SelectionChain
from dots.components.token import Token
from dots.events.bus import (
    EventBus,
    EVENT_CHAIN_CHANGED,
    EVENT_CLEAR_COMMITTED,
    EVENT_GESTURE_RELEASED,
    EVENT_TOKEN_TOUCHED,
)
from dots.systems.board_ops import columns_of, get_token, live_tokens_of_color
from dots.systems.clear_resolution import refill_pending
from dots.systems.state_utils import get_round_state, get_selection_chain
from dots.utils.grid_geometry import is_adjacent

logger = logging.getLogger(__name__)


class ChainSystem:
    """Builds the player's chain from token touches and hands it off on release.

    Touch handling, in order:

    * empty chain: the token starts a chain;
    * not adjacent to the tail or a different color: ignored;
    * second-to-last token: backtrack, the tail is popped (this also undoes a loop);
    * new token while building: appended;
    * token already in the chain while building: the chain loops, every live token
      of that color becomes the clear set and the token is appended once more;
    * anything else while looped: ignored.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TOKEN_TOUCHED, self.on_token_touched)
        self.event_bus.subscribe(EVENT_GESTURE_RELEASED, self.on_gesture_released)

    @property
    def chain(self) -> SelectionChain:
        return get_selection_chain(self.world)

    def on_token_touched(self, sender, **kwargs):
        entity = kwargs.get('entity')
        if entity is None:
            return
        if get_round_state(self.world).phase is not RoundPhase.RUNNING:
            return
        self.touch(entity)

    def on_gesture_released(self, sender, **kwargs):
        self.release()

    def touch(self, entity: int) -> bool:
        """Apply one candidate touch. Returns True when the chain changed."""
        token = get_token(self.world, entity)
        if token is None or not token.alive:
            return False
        chain = self.chain
        if chain.state is ChainState.EMPTY:
            chain.state = ChainState.BUILDING
            chain.color = token.color
            self._append(chain, entity, token)
            return True
        if not self._is_valid_next(chain, token):
            return False
        if self._is_backtrack(chain, entity):
            self._pop(chain)
            return True
        if chain.state is ChainState.LOOPED:
            return False
        if entity not in chain.tokens:
            self._append(chain, entity, token)
            return True
        self._close_loop(chain, entity, token)
        return True

    def release(self) -> List[int]:
        """End the gesture. Returns the clear set handed off, empty when discarded.

        Chains of one token and chains released while a refill is pending are discarded.
        """
        chain = self.chain
        if len(chain.tokens) <= 1 or refill_pending(self.world):
            if chain.tokens:
                self._discard(chain)
            chain.reset()
            return []
        clear_set = chain.effective_clear_set()
        color = chain.color
        chain.reset()
        columns = columns_of(self.world, clear_set)
        logger.debug("Chain released: %d %s tokens over columns %s", len(clear_set), color, columns)
        self.event_bus.emit(
            EVENT_CLEAR_COMMITTED,
            tokens=clear_set,
            columns=columns,
            color=color,
            chain_length=len(clear_set),
        )
        return clear_set

    def reset(self) -> None:
        self.chain.reset()

    def _is_valid_next(self, chain: SelectionChain, token: Token) -> bool:
        tail = get_token(self.world, chain.tokens[-1])
        if tail is None:
            return False
        if tail.color != token.color:
            return False
        return is_adjacent((tail.column, tail.row), (token.column, token.row))

    @staticmethod
    def _is_backtrack(chain: SelectionChain, entity: int) -> bool:
        return len(chain.tokens) >= 2 and chain.tokens[-2] == entity

    def _append(self, chain: SelectionChain, entity: int, token: Token) -> None:
        chain.tokens.append(entity)
        self._emit_changed(chain, delta=1, color=token.color)

    def _pop(self, chain: SelectionChain) -> None:
        if chain.looped:
            chain.state = ChainState.BUILDING
            chain.clear_set.clear()
        popped = chain.tokens.pop()
        token = get_token(self.world, popped)
        self._emit_changed(chain, delta=-1, color=token.color if token else chain.color)

    def _close_loop(self, chain: SelectionChain, entity: int, token: Token) -> None:
        chain.state = ChainState.LOOPED
        chain.clear_set = live_tokens_of_color(self.world, token.color)
        logger.debug("Loop closed on %s: %d tokens selected", token.color, len(chain.clear_set))
        # The closing token is appended a second time, so the preview counts it twice.
        self._append(chain, entity, token)

    def _discard(self, chain: SelectionChain) -> None:
        self._emit_changed_payload([], looped=False, delta=-len(chain.tokens), color=chain.color, clear_size=0)

    def _emit_changed(self, chain: SelectionChain, *, delta: int, color: Optional[str]) -> None:
        clear_size = len(chain.clear_set) if chain.looped else len(chain.tokens)
        self._emit_changed_payload(list(chain.tokens), looped=chain.looped, delta=delta, color=color, clear_size=clear_size)

    def _emit_changed_payload(self, tokens, *, looped, delta, color, clear_size) -> None:
        self.event_bus.emit(
            EVENT_CHAIN_CHANGED,
            tokens=tokens,
            looped=looped,
            delta=delta,
            color=color,
            clear_size=clear_size,
        )
