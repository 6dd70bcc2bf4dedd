import random

from dots.components.clear_latch import ClearLatch
from dots.components.round_state import RoundPhase
from dots.components.selection_chain import ChainState
from dots.components.token import Token
from dots.events.bus import (
    EVENT_CHAIN_CHANGED,
    EVENT_CLEAR_COMMITTED,
    EVENT_GESTURE_RELEASED,
    EVENT_TOKEN_TOUCHED,
)
from dots.systems.board_ops import fill_board
from dots.systems.chain import ChainSystem
from dots.systems.score import ScoreSystem
from dots.systems.state_utils import get_board, get_round_state, get_score_state, get_selection_chain
from dots.utils.grid_geometry import is_adjacent, neighbors
from tests.helpers import make_world, record

# Three reds in a triangle at (0,0), (1,0), (1,1) plus a stray red at (2,2).
LAYOUT = [
    ["red", "red", "blue"],
    ["blue", "red", "blue"],
    ["blue", "blue", "red"],
]


def setup_chain():
    world, bus, grid = make_world(LAYOUT)
    system = ChainSystem(world, bus)
    t1, t2, t3 = grid[0][0], grid[0][1], grid[1][1]
    return world, bus, grid, system, (t1, t2, t3)


def test_touches_extend_the_chain():
    world, bus, _, system, (t1, t2, _) = setup_chain()
    changes = record(bus, EVENT_CHAIN_CHANGED)
    assert system.touch(t1)
    assert system.touch(t2)
    chain = get_selection_chain(world)
    assert chain.tokens == [t1, t2]
    assert chain.state is ChainState.BUILDING
    assert chain.color == "red"
    assert [c["delta"] for c in changes] == [1, 1]


def test_wrong_color_or_distant_token_is_ignored():
    world, _, grid, system, (t1, t2, _) = setup_chain()
    system.touch(t1)
    system.touch(t2)
    assert not system.touch(grid[1][2])  # adjacent but blue
    assert not system.touch(grid[2][2])  # red but not adjacent
    assert get_selection_chain(world).tokens == [t1, t2]


def test_touching_the_previous_token_backtracks():
    world, bus, _, system, (t1, t2, _) = setup_chain()
    system.touch(t1)
    system.touch(t2)
    changes = record(bus, EVENT_CHAIN_CHANGED)
    assert system.touch(t1)
    assert get_selection_chain(world).tokens == [t1]
    assert changes[-1]["delta"] == -1


def test_revisiting_a_chain_token_closes_a_loop():
    world, bus, grid, system, (t1, t2, t3) = setup_chain()
    changes = record(bus, EVENT_CHAIN_CHANGED)
    for ent in (t1, t2, t3, t1):
        assert system.touch(ent)
    chain = get_selection_chain(world)
    assert chain.state is ChainState.LOOPED
    assert chain.tokens == [t1, t2, t3, t1]
    assert set(chain.clear_set) == {t1, t2, t3, grid[2][2]}
    assert changes[-1]["looped"] is True
    assert changes[-1]["clear_size"] == 4


def test_looped_chain_ignores_further_touches():
    world, _, _, system, (t1, t2, t3) = setup_chain()
    for ent in (t1, t2, t3, t1):
        system.touch(ent)
    assert not system.touch(t2)
    assert get_selection_chain(world).tokens == [t1, t2, t3, t1]


def test_backtracking_out_of_a_loop_reopens_the_chain():
    world, _, _, system, (t1, t2, t3) = setup_chain()
    for ent in (t1, t2, t3, t1):
        system.touch(ent)
    assert system.touch(t3)
    chain = get_selection_chain(world)
    assert chain.state is ChainState.BUILDING
    assert chain.tokens == [t1, t2, t3]
    assert chain.clear_set == []


def test_single_token_release_is_discarded():
    world, bus, _, system, (t1, _, _) = setup_chain()
    commits = record(bus, EVENT_CLEAR_COMMITTED)
    changes = record(bus, EVENT_CHAIN_CHANGED)
    system.touch(t1)
    assert system.release() == []
    assert commits == []
    assert changes[-1]["delta"] == -1
    assert changes[-1]["tokens"] == []
    assert get_selection_chain(world).state is ChainState.EMPTY


def test_release_commits_the_chain():
    world, bus, _, system, (t1, t2, t3) = setup_chain()
    commits = record(bus, EVENT_CLEAR_COMMITTED)
    for ent in (t1, t2, t3):
        bus.emit(EVENT_TOKEN_TOUCHED, entity=ent)
    bus.emit(EVENT_GESTURE_RELEASED)
    assert len(commits) == 1
    payload = commits[0]
    assert payload["tokens"] == [t1, t2, t3]
    assert payload["columns"] == [0, 1]
    assert payload["color"] == "red"
    assert payload["chain_length"] == 3
    assert get_selection_chain(world).tokens == []


def test_loop_release_commits_every_token_of_the_color():
    _, bus, grid, system, (t1, t2, t3) = setup_chain()
    commits = record(bus, EVENT_CLEAR_COMMITTED)
    for ent in (t1, t2, t3, t1):
        system.touch(ent)
    cleared = system.release()
    assert set(cleared) == {t1, t2, t3, grid[2][2]}
    assert commits[0]["chain_length"] == 4
    assert commits[0]["columns"] == [0, 1, 2]


def test_touches_are_ignored_outside_a_running_round():
    world, bus, _, _, (t1, _, _) = setup_chain()
    get_round_state(world).phase = RoundPhase.ENDED
    bus.emit(EVENT_TOKEN_TOUCHED, entity=t1)
    assert get_selection_chain(world).tokens == []


def test_release_during_a_pending_refill_is_discarded():
    world, bus, _, system, (t1, t2, _) = setup_chain()
    ScoreSystem(world, bus)
    commits = record(bus, EVENT_CLEAR_COMMITTED)
    world.create_entity(ClearLatch(tokens=[t1], columns=[0]))
    system.touch(t1)
    system.touch(t2)
    assert system.release() == []
    assert commits == []
    assert get_score_state(world).preview == 0
    assert get_score_state(world).total == 0


def test_random_touches_keep_every_link_adjacent_and_same_colored():
    rng = random.Random(1234)
    world, bus, _ = make_world(width=6, height=6, circle_colors=2, seed=99)
    fill_board(world)
    system = ChainSystem(world, bus)
    board = get_board(world)
    for _ in range(400):
        chain = get_selection_chain(world)
        if chain.tokens and rng.random() < 0.7:
            tail = world.component_for_entity(chain.tokens[-1], Token)
            column, row = rng.choice(neighbors(tail.column, tail.row, 6, 6))
        else:
            column, row = rng.randrange(6), rng.randrange(6)
        system.touch(board.slot(column, row))
        chain = get_selection_chain(world)
        for before, after in zip(chain.tokens, chain.tokens[1:]):
            first = world.component_for_entity(before, Token)
            second = world.component_for_entity(after, Token)
            assert first.color == second.color == chain.color
            assert is_adjacent((first.column, first.row), (second.column, second.row))
        if rng.random() < 0.05:
            system.release()
            fill_board(world)
