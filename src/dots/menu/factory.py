"""Factory helpers for creating and removing the round menu entities."""
from esper import World

from dots.menu.components import MenuAction, MenuBackground, MenuButton, MenuTag, MenuText

TITLE = "DOTS!"


def spawn_round_menu(
    world: World,
    width: float,
    height: float,
    *,
    subtitle: str,
    subtitle2: str,
    button_label: str,
) -> None:
    """Create the menu panel: title, two info lines, a start button and an exit button.

    Coordinates are y-up, matching the arcade window.
    """
    clear_menu(world)
    center_x = width / 2
    center_y = height / 2

    world.create_entity(MenuBackground(x=center_x, y=center_y), MenuTag())
    text_specs = (
        (TITLE, center_y + 70, 32),
        (subtitle, center_y + 25, 16),
        (subtitle2, center_y - 5, 16),
    )
    for text, y_position, size in text_specs:
        world.create_entity(MenuText(text=text, x=center_x, y=y_position, font_size=size), MenuTag())
    button_specs = (
        (button_label, MenuAction.START, center_y - 50),
        ("Exit", MenuAction.EXIT, center_y - 80),
    )
    for label, action, y_position in button_specs:
        world.create_entity(MenuButton(label=label, action=action, x=center_x, y=y_position), MenuTag())


def clear_menu(world: World) -> int:
    """Remove all entities that are part of the menu UI."""
    to_delete: set[int] = set()
    for component_type in (MenuButton, MenuText, MenuBackground, MenuTag):
        for ent, _ in world.get_component(component_type):
            to_delete.add(ent)
    for ent in to_delete:
        world.delete_entity(ent, immediate=True)
    return len(to_delete)


def menu_visible(world: World) -> bool:
    return any(True for _ in world.get_component(MenuTag))
