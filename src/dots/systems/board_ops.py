from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Collection, Iterable, List, Optional, Sequence, Tuple

from esper import World

from dots.components.token import Token
from dots.systems.state_utils import get_board, get_palette

logger = logging.getLogger(__name__)

Position = Tuple[int, int]  # (column, row)
Move = Tuple[int, int, int]  # (entity, from_row, to_row)


@dataclass(slots=True)
class FallInstruction:
    token: int
    from_row: int
    to_row: int

    @property
    def distance(self) -> int:
        return self.to_row - self.from_row


@dataclass(slots=True)
class SpawnInstruction:
    token: int
    color: str
    from_row: int
    to_row: int

    @property
    def distance(self) -> int:
        return self.to_row - self.from_row


@dataclass(slots=True)
class ColumnReport:
    """Fall and spawn instructions for one compacted column, both ordered top to bottom."""
    column: int
    falls: List[FallInstruction] = field(default_factory=list)
    spawns: List[SpawnInstruction] = field(default_factory=list)

    @property
    def survivor_count(self) -> int:
        return len(self.falls)

    @property
    def spawn_count(self) -> int:
        return len(self.spawns)


@dataclass(slots=True)
class CompactionReport:
    columns: List[ColumnReport] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.columns

    def moved(self) -> List[Tuple[int, FallInstruction]]:
        """Survivors that actually fall, paired with their column."""
        return [
            (report.column, fall)
            for report in self.columns
            for fall in report.falls
            if fall.distance > 0
        ]


@dataclass(slots=True)
class ColumnCompaction:
    slots: List[Optional[int]]
    moves: List[Move]
    spawn_count: int


def get_token(world: World, entity: int) -> Token | None:
    try:
        return world.component_for_entity(entity, Token)
    except KeyError:
        return None


def token_at(world: World, column: int, row: int) -> int | None:
    """Entity id of the live token in (column, row), if any."""
    entity = get_board(world).slot(column, row)
    if entity is None:
        return None
    token = get_token(world, entity)
    if token is None or not token.alive:
        return None
    return entity


def random_color(world: World, rng: random.Random | None = None) -> str:
    choices = get_palette(world).spawnable_colors()
    if not choices:
        raise RuntimeError("Palette has no spawnable colors")
    return _resolve_rng(world, rng).choice(choices)


def spawn_token(world: World, column: int, row: int, color: str) -> int:
    return world.create_entity(Token(color=color, column=column, row=row))


def clear_board(world: World) -> int:
    """Delete every token entity and empty all slots. Returns the number removed."""
    board = get_board(world)
    removed = 0
    for entity in board.entities():
        if world.entity_exists(entity):
            world.delete_entity(entity, immediate=True)
            removed += 1
    board.columns = [[None] * board.height for _ in range(board.width)]
    return removed


def fill_board(world: World, rng: random.Random | None = None) -> List[int]:
    """Replace the board wholesale with freshly colored tokens."""
    clear_board(world)
    board = get_board(world)
    rng = _resolve_rng(world, rng)
    created: List[int] = []
    for row in range(board.height):
        for column in range(board.width):
            entity = spawn_token(world, column, row, random_color(world, rng))
            board.columns[column][row] = entity
            created.append(entity)
    logger.debug("Filled %dx%d board", board.width, board.height)
    return created


def set_board_colors(world: World, layout: Sequence[Sequence[str]]) -> List[List[int]]:
    """Replace the board with tokens colored from ``layout`` given as rows, top row first.

    Returns the entity ids in the same row-major shape.
    """
    clear_board(world)
    board = get_board(world)
    if len(layout) != board.height or any(len(row) != board.width for row in layout):
        raise ValueError(f"Layout must be {board.height} rows of {board.width} colors")
    entities: List[List[int]] = []
    for row, colors in enumerate(layout):
        row_entities: List[int] = []
        for column, color in enumerate(colors):
            entity = spawn_token(world, column, row, color)
            board.columns[column][row] = entity
            row_entities.append(entity)
        entities.append(row_entities)
    return entities


def live_tokens_of_color(world: World, color: str) -> List[int]:
    """Every live token of ``color``, column by column, top to bottom."""
    found: List[int] = []
    for entity in get_board(world).entities():
        token = get_token(world, entity)
        if token is not None and token.alive and token.color == color:
            found.append(entity)
    return found


def columns_of(world: World, entities: Iterable[int]) -> List[int]:
    columns: set[int] = set()
    for entity in entities:
        token = get_token(world, entity)
        if token is not None:
            columns.add(token.column)
    return sorted(columns)


def compact_column(slots: Sequence[Optional[int]], dead: Collection[int]) -> ColumnCompaction:
    """Collapse one column so its survivors rest at the bottom in their original order.

    Empty slots and ids in ``dead`` count as gaps. Each survivor moves down by the
    number of gaps below it. The returned slots keep ``spawn_count`` empty entries
    at the top for the caller to refill.
    """
    height = len(slots)
    survivors: List[Move] = []
    gap = 0
    for row in range(height - 1, -1, -1):
        entity = slots[row]
        if entity is None or entity in dead:
            gap += 1
            continue
        survivors.append((entity, row, row + gap))
    survivors.reverse()
    spawn_count = height - len(survivors)
    new_slots: List[Optional[int]] = [None] * spawn_count
    new_slots.extend(entity for entity, _, _ in survivors)
    return ColumnCompaction(slots=new_slots, moves=survivors, spawn_count=spawn_count)


def compact_board(
    world: World,
    clear_set: Iterable[int],
    rng: random.Random | None = None,
) -> CompactionReport:
    """Remove ``clear_set`` from the board, let survivors fall and refill every gap.

    The board is updated before returning; dead token entities are deleted.
    """
    board = get_board(world)
    dead: set[int] = set()
    affected: set[int] = set()
    for entity in clear_set:
        token = get_token(world, entity)
        if token is None:
            continue
        token.alive = False
        dead.add(entity)
        affected.add(token.column)
    report = CompactionReport()
    if not dead:
        return report
    rng = _resolve_rng(world, rng)
    for column in sorted(affected):
        result = compact_column(board.columns[column], dead)
        column_report = ColumnReport(column=column)
        for entity, from_row, to_row in result.moves:
            token = world.component_for_entity(entity, Token)
            token.row = to_row
            column_report.falls.append(FallInstruction(token=entity, from_row=from_row, to_row=to_row))
        slots = result.slots
        for row in range(result.spawn_count):
            color = random_color(world, rng)
            entity = spawn_token(world, column, row, color)
            slots[row] = entity
            column_report.spawns.append(
                SpawnInstruction(token=entity, color=color, from_row=row - result.spawn_count, to_row=row)
            )
        board.columns[column] = slots
        report.columns.append(column_report)
    for entity in dead:
        if world.entity_exists(entity):
            world.delete_entity(entity, immediate=True)
    logger.debug(
        "Compacted columns %s: %d cleared, %d spawned",
        sorted(affected),
        len(dead),
        sum(r.spawn_count for r in report.columns),
    )
    return report


def _resolve_rng(world: World, rng: random.Random | None) -> random.Random:
    if rng is not None:
        return rng
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()
