"""Rendering system responsible for drawing the round menu."""
import arcade
from esper import World
from dots.menu.components import MenuBackground, MenuButton, MenuText

HOVER_COLOR = (255, 255, 0)


class MenuRenderSystem:
    """Renders menu entities whenever they exist."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window

    def process(self) -> None:
        for _, background in self.world.get_component(MenuBackground):
            arcade.draw_lbwh_rectangle_filled(
                background.x - background.width / 2,
                background.y - background.height / 2,
                background.width,
                background.height,
                background.color,
            )

        for _, line in self.world.get_component(MenuText):
            arcade.draw_text(
                line.text,
                line.x,
                line.y,
                arcade.color.WHITE,
                line.font_size,
                anchor_x="center",
                anchor_y="center",
            )

        for _, button in self.world.get_component(MenuButton):
            text_color = HOVER_COLOR if button.hovered else arcade.color.WHITE
            if not button.enabled:
                text_color = arcade.color.SILVER
            arcade.draw_text(
                button.label,
                button.x,
                button.y,
                text_color,
                24,
                anchor_x="center",
                anchor_y="center",
            )
