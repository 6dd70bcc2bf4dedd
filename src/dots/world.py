import random

from esper import World
from dots.events.bus import EventBus
from dots.components.board import Board
from dots.components.game_config import GameConfig
from dots.components.palette import Palette
from dots.components.pointer_state import PointerState
from dots.components.round_state import RoundState
from dots.components.score_state import ScoreState
from dots.components.selection_chain import SelectionChain


def create_world(
    event_bus: EventBus,
    *,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> World:
    """Build the world with every singleton resource the systems expect.

    The board entity starts with empty slots; ``RoundSystem.start_round`` fills it.
    """
    config = config or GameConfig()
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(
        config,
        RoundState(duration=config.round_duration),
        ScoreState(),
        SelectionChain(),
        PointerState(),
    )
    world.create_entity(
        Palette(colors=dict(config.colors), spawnable=config.spawnable_colors()),
    )
    world.create_entity(Board(width=config.width, height=config.height))
    return world
