from esper import World
from dots.components.animation_shrink import ShrinkAnimation
from dots.components.animation_fall import FallAnimation
from dots.components.duration import Duration
from dots.constants import FALL_STEP_DECAY, FALL_STEP_DURATION, SHRINK_DURATION
from typing import List


def fall_duration(distance: int, step: float = FALL_STEP_DURATION, decay: float = FALL_STEP_DECAY) -> float:
    """Total time to fall ``distance`` rows when every row is ``decay`` times quicker than the last."""
    total = 0.0
    for _ in range(max(distance, 1)):
        total += step
        step *= decay
    return total


class AnimationFactory:
    def __init__(self, world: World):
        self.world = world

    def create_shrink_group(self, items: List[dict], duration: float = SHRINK_DURATION) -> List[int]:
        ents = []
        for item in items:
            ent = self.world.create_entity()
            self.world.add_component(ent, ShrinkAnimation(
                token=item['token'], column=item['column'], row=item['row'], color=item['color'],
            ))
            self.world.add_component(ent, Duration(duration))
            ents.append(ent)
        return ents

    def create_fall_group(self, items: List[dict], step_duration: float = FALL_STEP_DURATION) -> List[int]:
        ents = []
        for item in items:
            ent = self.world.create_entity()
            fall = FallAnimation(
                token=item['token'],
                column=item['column'],
                from_row=item['from'],
                to_row=item['to'],
                spawned=item.get('spawned', False),
            )
            self.world.add_component(ent, fall)
            self.world.add_component(ent, Duration(fall_duration(fall.to_row - fall.from_row, step_duration)))
            ents.append(ent)
        return ents
