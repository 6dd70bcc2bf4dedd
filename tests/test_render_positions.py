from dots.components.animation_fall import FallAnimation
from dots.systems.render import RenderSystem
from tests.helpers import make_world


class DummyWindow:
    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height


def test_positions_follow_the_board_slots():
    world, bus, grid = make_world([["red", "blue"], ["blue", "red"]])
    render = RenderSystem(world, bus, DummyWindow())
    geometry = render.geometry()
    positions = render.token_positions(geometry)
    assert positions[grid[1][0]] == geometry.cell_center(0, 1)
    assert len(positions) == 4


def test_falling_token_is_drawn_between_its_rows():
    world, bus, grid = make_world([["red"], ["blue"], ["red"]])
    render = RenderSystem(world, bus, DummyWindow())
    render.use_easing = False
    ent = grid[2][0]
    world.create_entity(FallAnimation(token=ent, column=0, from_row=1, to_row=2, linear=0.5))
    geometry = render.geometry()
    assert render.token_positions(geometry)[ent] == geometry.cell_center(0, 1.5)
