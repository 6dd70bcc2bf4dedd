import pytest

from dots.components.token import Token
from dots.systems.board_ops import (
    clear_board,
    compact_board,
    compact_column,
    fill_board,
    live_tokens_of_color,
    set_board_colors,
    token_at,
)
from dots.systems.state_utils import get_board
from tests.helpers import make_world


COLUMN = [["red"], ["blue"], ["red"], ["blue"], ["red"]]


def test_fill_board_uses_only_spawnable_colors():
    world, _, _ = make_world(width=4, height=3, circle_colors=2)
    created = fill_board(world)
    assert len(created) == 12
    colors = {world.component_for_entity(ent, Token).color for ent in created}
    assert colors <= {"red", "blue"}
    board = get_board(world)
    for column in range(4):
        for row in range(3):
            ent = board.slot(column, row)
            token = world.component_for_entity(ent, Token)
            assert (token.column, token.row) == (column, row)


def test_set_board_colors_rejects_a_wrong_shape():
    world, _, _ = make_world(width=2, height=2)
    with pytest.raises(ValueError):
        set_board_colors(world, [["red", "red"]])


def test_clear_board_deletes_tokens():
    world, _, grid = make_world([["red", "blue"], ["blue", "red"]])
    assert clear_board(world) == 4
    assert get_board(world).entities() == []
    assert not world.entity_exists(grid[0][0])


def test_compact_column_moves_survivors_by_gaps_below():
    result = compact_column([10, 11, 12, 13, 14], {11, 13})
    assert result.spawn_count == 2
    assert result.slots == [None, None, 10, 12, 14]
    assert result.moves == [(10, 0, 2), (12, 2, 3), (14, 4, 4)]


def test_compact_column_treats_empty_slots_as_gaps():
    result = compact_column([None, 5, None, 6], set())
    assert result.slots == [None, None, 5, 6]
    assert result.spawn_count == 2


def test_compact_board_clears_rows_one_and_three():
    world, _, grid = make_world(COLUMN)
    a, b, c, d, e = (row[0] for row in grid)

    report = compact_board(world, [b, d])

    board = get_board(world)
    column = board.columns[0]
    assert column[2:] == [a, c, e]
    assert world.component_for_entity(a, Token).row == 2
    assert world.component_for_entity(c, Token).row == 3
    assert world.component_for_entity(e, Token).row == 4
    assert not world.entity_exists(b)
    assert not world.entity_exists(d)

    (column_report,) = report.columns
    assert [(f.token, f.from_row, f.to_row) for f in column_report.falls] == [(a, 0, 2), (c, 2, 3), (e, 4, 4)]
    assert [(s.from_row, s.to_row) for s in column_report.spawns] == [(-2, 0), (-1, 1)]
    assert [s.token for s in column_report.spawns] == column[:2]
    assert [fall.token for _, fall in report.moved()] == [a, c]


def test_compaction_keeps_every_slot_filled_and_unique():
    layout = [
        ["red", "blue", "red"],
        ["blue", "blue", "green"],
        ["red", "green", "red"],
    ]
    world, _, _ = make_world(layout)
    reds = live_tokens_of_color(world, "red")
    report = compact_board(world, reds)
    board = get_board(world)
    ids = board.entities()
    assert len(ids) == 9
    assert len(set(ids)) == 9
    assert sorted(r.column for r in report.columns) == [0, 2]
    for column in range(3):
        for row in range(3):
            token = world.component_for_entity(board.slot(column, row), Token)
            assert (token.column, token.row) == (column, row)
            assert token.alive


def test_compact_board_with_nothing_to_clear_is_a_no_op():
    world, _, grid = make_world(COLUMN)
    before = list(get_board(world).columns[0])
    report = compact_board(world, [])
    assert report.empty
    assert get_board(world).columns[0] == before
    assert token_at(world, 0, 0) == grid[0][0]
