"""Screen geometry for the staggered board (arcade coordinates, y grows upwards)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from esper import World

from dots.components.animation_fall import FallAnimation
from dots.components.token import Token
from dots.constants import (
    CIRCLE_RADIUS_RATIO,
    CURSOR_RADIUS_RATIO,
    HUD_BOTTOM_HEIGHT,
    HUD_TOP_HEIGHT,
)
from dots.systems.state_utils import get_board, get_config


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    cell_size: float
    left: float
    top: float
    columns: int
    rows: int

    @property
    def circle_radius(self) -> float:
        return self.cell_size * CIRCLE_RADIUS_RATIO

    @property
    def cursor_radius(self) -> float:
        return self.cell_size * CURSOR_RADIUS_RATIO

    @property
    def width(self) -> float:
        # Even rows stick out half a cell to the right.
        return self.columns * self.cell_size + self.cell_size / 2

    @property
    def height(self) -> float:
        return self.rows * self.cell_size

    def cell_center(self, column: float, row: float) -> Tuple[float, float]:
        """Center of a slot; fractional rows interpolate between the two rows they span."""
        low = math.floor(row)
        frac = row - low
        x_low, y_low = self._integer_center(column, low)
        if frac == 0:
            return x_low, y_low
        x_high, y_high = self._integer_center(column, low + 1)
        return x_low + (x_high - x_low) * frac, y_low + (y_high - y_low) * frac

    def _integer_center(self, column: float, row: int) -> Tuple[float, float]:
        x = self.left + column * self.cell_size + self.cell_size / 2
        if row % 2 == 0:
            x += self.cell_size / 2
        y = self.top - row * self.cell_size - self.cell_size / 2
        return x, y


def compute_board_geometry(world: World, window_width: float, window_height: float) -> BoardGeometry:
    """Fit the configured board between the HUD bands, centered horizontally.

    The configured cell size is an upper bound; small windows shrink it.
    """
    config = get_config(world)
    available_h = max(window_height - HUD_TOP_HEIGHT - HUD_BOTTOM_HEIGHT, 1)
    cell = min(
        float(config.cell_size),
        available_h / config.height,
        window_width / (config.width + 0.5),
    )
    cell = max(cell, 8.0)
    board_width = config.width * cell + cell / 2
    left = (window_width - board_width) / 2
    used_h = config.height * cell
    top = HUD_BOTTOM_HEIGHT + (available_h + used_h) / 2
    return BoardGeometry(cell_size=cell, left=left, top=top, columns=config.width, rows=config.height)


def ease_in_out(p: float) -> float:
    if p < 0.5:
        return 2 * p * p
    return -2 * p * p + 4 * p - 1


def token_positions(world: World, geometry: BoardGeometry, use_easing: bool = True) -> Dict[int, Tuple[float, float]]:
    """Screen position of every live token, following any fall in progress.

    Compaction moves a token to its landing row at once; until its fall
    finishes the token is shown, and hit, between its two rows.
    """
    falls = {fall.token: fall for _, fall in world.get_component(FallAnimation)}
    positions: Dict[int, Tuple[float, float]] = {}
    for entity in get_board(world).entities():
        try:
            token = world.component_for_entity(entity, Token)
        except KeyError:
            continue
        if not token.alive:
            continue
        row: float = token.row
        fall = falls.get(entity)
        if fall is not None:
            p = ease_in_out(fall.linear) if use_easing else fall.linear
            row = fall.from_row + (fall.to_row - fall.from_row) * p
        positions[entity] = geometry.cell_center(token.column, row)
    return positions


def token_at_point(world: World, geometry: BoardGeometry, x: float, y: float) -> Optional[int]:
    """Live token whose drawn circle overlaps the cursor hit region at (x, y); the closest wins."""
    reach = geometry.circle_radius + geometry.cursor_radius
    best: Optional[int] = None
    best_dist = reach * reach
    for entity, (cx, cy) in token_positions(world, geometry).items():
        dist = (cx - x) ** 2 + (cy - y) ** 2
        if dist <= best_dist:
            best = entity
            best_dist = dist
    return best
