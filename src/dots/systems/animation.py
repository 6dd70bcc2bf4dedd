from dots.events.bus import (EVENT_TICK, EventBus, EVENT_ANIMATION_START, EVENT_ANIMATION_COMPLETE,
                             EVENT_ROUND_STATE_CHANGED)
from dots.components.animation_shrink import ShrinkAnimation
from dots.components.animation_fall import FallAnimation
from dots.components.duration import Duration
from dots.components.round_state import RoundPhase
from dots.animation_factory import AnimationFactory
from dots.systems.state_utils import get_config
from esper import World


class AnimationSystem:
    """Drives timing of animations; each animation is its own component instance.

    Shrinks report completion one token at a time so a latch can count them.
    Falls complete as a group once every fall has landed.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.factory = AnimationFactory(world)
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)
        event_bus.subscribe(EVENT_ROUND_STATE_CHANGED, self.on_round_state_changed)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind'); items = kwargs.get('items', [])
        config = get_config(self.world)
        if kind == 'shrink':
            self.factory.create_shrink_group(items, duration=config.shrink_duration)
        elif kind == 'fall':
            self.factory.create_fall_group(items, step_duration=config.fall_step_duration)

    def on_round_state_changed(self, sender, **kwargs):
        if kwargs.get('phase') is RoundPhase.ENDED:
            self.clear_all()

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        # Shrink progression
        for ent, shrink in list(self.world.get_component(ShrinkAnimation)):
            d = self.world.component_for_entity(ent, Duration)
            shrink.scale -= dt / d.value
            if shrink.scale <= 0.0:
                shrink.scale = 0.0
                token = shrink.token
                self._delete_animation_entity(ent)
                self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='shrink', items=[token])
        # Fall progression
        falls = list(self.world.get_component(FallAnimation))
        if falls:
            for ent, fall in falls:
                if fall.linear < 1.0:
                    d = self.world.component_for_entity(ent, Duration)
                    fall.linear += dt / d.value
                    if fall.linear > 1.0:
                        fall.linear = 1.0
            if all(fall.linear >= 1.0 for _, fall in falls):
                items = [{'token': fall.token, 'from': fall.from_row, 'to': fall.to_row} for _, fall in falls]
                for ent, _ in falls:
                    self._delete_animation_entity(ent)
                self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='fall', items=items)

    def clear_all(self) -> int:
        """Drop every in-flight animation without reporting completion."""
        ents = {ent for ent, _ in self.world.get_component(ShrinkAnimation)}
        ents.update(ent for ent, _ in self.world.get_component(FallAnimation))
        for ent in ents:
            self._delete_animation_entity(ent)
        return len(ents)

    def _delete_animation_entity(self, ent: int):
        if self.world.entity_exists(ent):
            self.world.delete_entity(ent, immediate=True)
