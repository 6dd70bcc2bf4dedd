from typing import Dict, Optional, Tuple

from esper import World

from dots.components.animation_shrink import ShrinkAnimation
from dots.components.round_state import RoundPhase
from dots.components.token import Token
from dots.constants import COUNTDOWN_WARNING_SECONDS
from dots.events.bus import EventBus
from dots.systems.state_utils import (
    get_config,
    get_or_create_pointer_state,
    get_palette,
    get_round_state,
    get_score_state,
    get_selection_chain,
)
from dots.ui.layout import BoardGeometry, compute_board_geometry, token_positions
from dots.utils.scoring import bonus_proportion, format_preview

TEXT_COLOR = (0, 0, 0)
WARNING_COLOR = (232, 77, 96)
LINE_WIDTH = 4
BORDER_THICKNESS = 6


class RenderSystem:
    """Draws the board, the chain affordances and the HUD for the running round."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.use_easing = True
        self._last_draw_coords: Dict[int, Tuple[float, float]] = {}

    def geometry(self) -> BoardGeometry:
        return compute_board_geometry(self.world, self.window.width, self.window.height)

    def token_positions(self, geometry: Optional[BoardGeometry] = None) -> Dict[int, Tuple[float, float]]:
        positions = token_positions(self.world, geometry or self.geometry(), use_easing=self.use_easing)
        self._last_draw_coords = positions
        return positions

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        if get_round_state(self.world).phase is not RoundPhase.RUNNING:
            return
        geometry = self.geometry()
        positions = self.token_positions(geometry)
        palette = get_palette(self.world)
        shrinking = {shrink.token for _, shrink in self.world.get_component(ShrinkAnimation)}

        self._draw_border(arcade, palette)
        self._draw_chain_lines(arcade, positions, palette)

        for entity, (x, y) in positions.items():
            if entity in shrinking:
                continue
            token = self.world.component_for_entity(entity, Token)
            arcade.draw_circle_filled(x, y, geometry.circle_radius, palette.rgb_for(token.color))

        for _, shrink in self.world.get_component(ShrinkAnimation):
            if shrink.scale <= 0:
                continue
            x, y = geometry.cell_center(shrink.column, shrink.row)
            arcade.draw_circle_filled(x, y, geometry.circle_radius * shrink.scale, palette.rgb_for(shrink.color))

        self._draw_hud(arcade, palette)

    def _draw_chain_lines(self, arcade, positions, palette) -> None:
        chain = get_selection_chain(self.world)
        if not chain.tokens or chain.color is None:
            return
        color = palette.rgb_for(chain.color)
        points = [positions[ent] for ent in chain.tokens if ent in positions]
        for (x1, y1), (x2, y2) in zip(points, points[1:]):
            arcade.draw_line(x1, y1, x2, y2, color, LINE_WIDTH)
        pointer = get_or_create_pointer_state(self.world)
        if pointer.gesture_active and points:
            x1, y1 = points[-1]
            arcade.draw_line(x1, y1, pointer.x, pointer.y, color, LINE_WIDTH)

    def _draw_border(self, arcade, palette) -> None:
        chain = get_selection_chain(self.world)
        if not chain.tokens or chain.color is None:
            return
        size = len(chain.clear_set) if chain.looped else len(chain.tokens)
        proportion = bonus_proportion(size, get_config(self.world).bonus_threshold)
        color = palette.rgb_for(chain.color)
        width, height = self.window.width, self.window.height
        half_w = proportion * width / 2
        half_h = proportion * height / 2
        arcade.draw_lbwh_rectangle_filled(width / 2 - half_w, height - BORDER_THICKNESS, half_w * 2, BORDER_THICKNESS, color)
        arcade.draw_lbwh_rectangle_filled(width / 2 - half_w, 0, half_w * 2, BORDER_THICKNESS, color)
        arcade.draw_lbwh_rectangle_filled(0, height / 2 - half_h, BORDER_THICKNESS, half_h * 2, color)
        arcade.draw_lbwh_rectangle_filled(width - BORDER_THICKNESS, height / 2 - half_h, BORDER_THICKNESS, half_h * 2, color)

    def _draw_hud(self, arcade, palette) -> None:
        width, height = self.window.width, self.window.height
        state = get_round_state(self.world)
        remaining = state.remaining
        countdown_color = WARNING_COLOR if remaining <= COUNTDOWN_WARNING_SECONDS else TEXT_COLOR
        arcade.draw_text(f"Time: {remaining:.2f}", width / 2, height - 28, countdown_color, 16, anchor_x="center")

        chain = get_selection_chain(self.world)
        score = get_score_state(self.world)
        preview_points = len(chain.clear_set) if chain.looped else score.preview
        preview = format_preview(preview_points, get_config(self.world).bonus_threshold)
        if preview:
            color = palette.rgb_for(score.preview_color) if score.preview_color else TEXT_COLOR
            arcade.draw_text(preview, width / 2, 48, color, 16, anchor_x="center")
        arcade.draw_text(f"Score: {score.total}", width / 2, 22, TEXT_COLOR, 16, anchor_x="center")
