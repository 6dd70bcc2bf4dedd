"""Neighbor rules for the staggered board.

Even rows are drawn half a cell to the right of odd rows, so a circle touches
the two circles above and below it that overlap its horizontal span plus its
left and right neighbors in the same row.
"""
from __future__ import annotations

from typing import FrozenSet, Tuple

Offset = Tuple[int, int]
Cell = Tuple[int, int]

# (dx, dy) pairs; dy grows downwards.
RIGHT_LEANING_OFFSETS: FrozenSet[Offset] = frozenset(
    {(-1, 0), (1, 0), (0, -1), (1, -1), (0, 1), (1, 1)}
)
LEFT_LEANING_OFFSETS: FrozenSet[Offset] = frozenset(
    {(-1, 0), (1, 0), (-1, -1), (0, -1), (-1, 1), (0, 1)}
)


def adjacent_offsets(row: int) -> FrozenSet[Offset]:
    """Return the six neighbor offsets for a circle sitting in ``row``."""
    if row % 2 == 0:
        return RIGHT_LEANING_OFFSETS
    return LEFT_LEANING_OFFSETS


def is_adjacent(origin: Cell, candidate: Cell) -> bool:
    """True when ``candidate`` (column, row) neighbors ``origin`` (column, row).

    The offset set is keyed by the origin's row. Board bounds are not checked.
    """
    dx = candidate[0] - origin[0]
    dy = candidate[1] - origin[1]
    return (dx, dy) in adjacent_offsets(origin[1])


def neighbors(column: int, row: int, width: int, height: int) -> list[Cell]:
    """In-bounds neighbor cells of (column, row)."""
    cells: list[Cell] = []
    for dx, dy in sorted(adjacent_offsets(row), key=lambda o: (o[1], o[0])):
        c, r = column + dx, row + dy
        if 0 <= c < width and 0 <= r < height:
            cells.append((c, r))
    return cells
