from typing import Type, TypeVar

from esper import World

from dots.components.board import Board
from dots.components.game_config import GameConfig
from dots.components.palette import Palette
from dots.components.pointer_state import PointerState
from dots.components.round_state import RoundState
from dots.components.score_state import ScoreState
from dots.components.selection_chain import SelectionChain

T = TypeVar("T")


def get_singleton(world: World, component_type: Type[T]) -> T:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} resource not found")


def get_config(world: World) -> GameConfig:
    return get_singleton(world, GameConfig)


def get_board(world: World) -> Board:
    return get_singleton(world, Board)


def get_palette(world: World) -> Palette:
    return get_singleton(world, Palette)


def get_round_state(world: World) -> RoundState:
    return get_singleton(world, RoundState)


def get_score_state(world: World) -> ScoreState:
    return get_singleton(world, ScoreState)


def get_selection_chain(world: World) -> SelectionChain:
    return get_singleton(world, SelectionChain)


def get_or_create_pointer_state(world: World) -> PointerState:
    """Return the shared PointerState component, creating it if absent."""
    existing = list(world.get_component(PointerState))
    if existing:
        return existing[0][1]
    world.create_entity(PointerState())
    return list(world.get_component(PointerState))[0][1]
