from __future__ import annotations

import random
from typing import Sequence

from esper import World

from dots.components.game_config import GameConfig
from dots.components.round_state import RoundPhase
from dots.events.bus import EVENT_TICK, EventBus
from dots.systems.board_ops import set_board_colors
from dots.systems.state_utils import get_round_state
from dots.world import create_world


def make_world(
    layout: Sequence[Sequence[str]] | None = None,
    *,
    bus: EventBus | None = None,
    running: bool = True,
    seed: int = 7,
    **config_overrides,
) -> tuple[World, EventBus, list[list[int]]]:
    """World sized to ``layout`` (rows, top row first) with the round already running.

    Returns the world, its bus and the entity grid in the layout's shape.
    """
    bus = bus or EventBus()
    if layout is not None:
        config_overrides.setdefault("height", len(layout))
        config_overrides.setdefault("width", len(layout[0]))
    world = create_world(bus, config=GameConfig(**config_overrides), rng=random.Random(seed))
    grid: list[list[int]] = []
    if layout is not None:
        grid = set_board_colors(world, layout)
    if running:
        state = get_round_state(world)
        state.phase = RoundPhase.RUNNING
        state.input_frozen = False
    return world, bus, grid


def drive_ticks(bus: EventBus, count: int = 30, dt: float = 0.02) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def record(bus: EventBus, name: str) -> list[dict]:
    """Collect every payload emitted under ``name``."""
    received: list[dict] = []
    bus.subscribe(name, lambda sender, **kwargs: received.append(kwargs))
    return received
