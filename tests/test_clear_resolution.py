from dots.components.animation_fall import FallAnimation
from dots.components.token import Token
from dots.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_CLEAR_COMMITTED,
    EVENT_COMPACTION_REPORT,
)
from dots.systems.animation import AnimationSystem
from dots.systems.chain import ChainSystem
from dots.systems.clear_resolution import ClearResolutionSystem, refill_pending
from dots.systems.score import ScoreSystem
from dots.systems.state_utils import get_board, get_score_state
from tests.helpers import drive_ticks, make_world, record

COLUMN = [["red"], ["blue"], ["red"], ["blue"], ["red"]]


def test_compaction_waits_for_every_distinct_removal():
    world, bus, grid = make_world(COLUMN)
    ClearResolutionSystem(world, bus)
    starts = record(bus, EVENT_ANIMATION_START)
    reports = record(bus, EVENT_COMPACTION_REPORT)
    b, d = grid[1][0], grid[3][0]

    bus.emit(EVENT_CLEAR_COMMITTED, tokens=[b, d], columns=[0], color="blue", chain_length=2)
    assert refill_pending(world)
    assert starts[-1]["kind"] == "shrink"
    assert [item["token"] for item in starts[-1]["items"]] == [b, d]

    bus.emit(EVENT_ANIMATION_COMPLETE, kind="shrink", items=[b])
    bus.emit(EVENT_ANIMATION_COMPLETE, kind="shrink", items=[b])
    assert refill_pending(world)
    assert reports == []

    bus.emit(EVENT_ANIMATION_COMPLETE, kind="shrink", items=[d])
    assert not refill_pending(world)
    assert len(reports) == 1
    fall = starts[-1]
    assert fall["kind"] == "fall"
    moved = [(item["token"], item["from"], item["to"]) for item in fall["items"] if not item.get("spawned")]
    assert moved == [(grid[0][0], 0, 2), (grid[2][0], 2, 3)]
    spawned = [(item["from"], item["to"]) for item in fall["items"] if item.get("spawned")]
    assert spawned == [(-2, 0), (-1, 1)]


def test_second_commit_during_a_pending_clear_is_ignored():
    world, bus, grid = make_world(COLUMN)
    ScoreSystem(world, bus)
    ClearResolutionSystem(world, bus)
    bus.emit(EVENT_CLEAR_COMMITTED, tokens=[grid[1][0]], columns=[0], color="blue", chain_length=1)
    starts = record(bus, EVENT_ANIMATION_START)
    bus.emit(EVENT_CLEAR_COMMITTED, tokens=[grid[3][0]], columns=[0], color="blue", chain_length=1)
    assert starts == []
    assert get_score_state(world).total == 1


def test_gesture_to_refill_flow():
    layout = [
        ["red", "red", "blue"],
        ["blue", "green", "green"],
        ["green", "blue", "blue"],
    ]
    world, bus, grid = make_world(layout)
    chain = ChainSystem(world, bus)
    ScoreSystem(world, bus)
    ClearResolutionSystem(world, bus)
    AnimationSystem(world, bus)
    completions = record(bus, EVENT_ANIMATION_COMPLETE)

    chain.touch(grid[0][0])
    chain.touch(grid[0][1])
    chain.release()
    assert get_score_state(world).total == 2
    assert refill_pending(world)

    drive_ticks(bus, count=60, dt=0.02)

    assert not refill_pending(world)
    assert [c["kind"] for c in completions if c["kind"] == "fall"] == ["fall"]
    assert list(world.get_component(FallAnimation)) == []
    board = get_board(world)
    ids = board.entities()
    assert len(ids) == 9
    assert grid[0][0] not in ids and grid[0][1] not in ids
    for column in range(3):
        for row in range(3):
            token = world.component_for_entity(board.slot(column, row), Token)
            assert (token.column, token.row) == (column, row)
