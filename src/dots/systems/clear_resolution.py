import logging
from typing import Optional, Tuple

from esper import World

from dots.components.clear_latch import ClearLatch
from dots.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_CLEAR_ACCEPTED,
    EVENT_CLEAR_COMMITTED,
    EVENT_COMPACTION_REPORT,
)
from dots.systems.board_ops import CompactionReport, compact_board, get_token

logger = logging.getLogger(__name__)


def refill_pending(world: World) -> bool:
    """True while a committed clear is waiting on its removal animations."""
    return any(True for _ in world.get_component(ClearLatch))


class ClearResolutionSystem:
    """Runs a committed clear set through removal, compaction and the fall hand-off.

    Each cleared token shrinks independently; compaction starts only after a
    completion has been seen for every distinct token in the set.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CLEAR_COMMITTED, self.on_clear_committed)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    def on_clear_committed(self, sender, **kwargs):
        tokens = list(dict.fromkeys(kwargs.get('tokens') or []))
        if not tokens:
            return
        if self._active_latch() is not None:
            logger.warning("Clear committed while a refill is pending; ignoring %d tokens", len(tokens))
            return
        columns = list(kwargs.get('columns') or [])
        self.world.create_entity(ClearLatch(tokens=tokens, columns=columns))
        self.event_bus.emit(
            EVENT_CLEAR_ACCEPTED,
            tokens=tokens,
            columns=columns,
            color=kwargs.get('color'),
            chain_length=kwargs.get('chain_length', len(tokens)),
        )
        items = []
        for entity in tokens:
            token = get_token(self.world, entity)
            if token is None:
                continue
            items.append({'token': entity, 'column': token.column, 'row': token.row, 'color': token.color})
        self.event_bus.emit(EVENT_ANIMATION_START, kind='shrink', items=items)

    def on_animation_complete(self, sender, **kwargs):
        if kwargs.get('kind') != 'shrink':
            return
        active = self._active_latch()
        if active is None:
            return
        _, latch = active
        for entity in kwargs.get('items', []):
            latch.record(entity)
        if latch.released:
            self.resolve_now()

    def resolve_now(self) -> Optional[CompactionReport]:
        """Compact the pending clear set immediately, whatever its latch count."""
        active = self._active_latch()
        if active is None:
            return None
        latch_ent, latch = active
        self.world.delete_entity(latch_ent, immediate=True)
        report = compact_board(self.world, latch.tokens)
        self.event_bus.emit(EVENT_COMPACTION_REPORT, report=report)
        items = []
        for column, fall in report.moved():
            items.append({'token': fall.token, 'column': column, 'from': fall.from_row, 'to': fall.to_row})
        for column_report in report.columns:
            for spawn in column_report.spawns:
                items.append({
                    'token': spawn.token,
                    'column': column_report.column,
                    'from': spawn.from_row,
                    'to': spawn.to_row,
                    'spawned': True,
                })
        if items:
            self.event_bus.emit(EVENT_ANIMATION_START, kind='fall', items=items)
        return report

    def _active_latch(self) -> Optional[Tuple[int, ClearLatch]]:
        for ent, latch in self.world.get_component(ClearLatch):
            return ent, latch
        return None
