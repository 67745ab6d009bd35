import pytest

from mazeswipe.maze import Direction, direction_from_delta, generate, parse_direction, resolve_slide, slide_duration
from mazeswipe.maze.slide import slide_distance, slide_path
from tests.maze_test_utils import corridor_grid, grid_from

# Column 1 open from row 1 to row 6, wall at (1,2) and (7,1).
COLUMN = corridor_grid(21, 21, [(r, 1) for r in range(1, 7)])


def test_blocked_right_is_noop():
    assert resolve_slide(COLUMN, (1, 1), Direction.RIGHT) == (1, 1)
    assert slide_path(COLUMN, (1, 1), Direction.RIGHT) == []


def test_slide_down_stops_before_wall():
    assert resolve_slide(COLUMN, (1, 1), Direction.DOWN) == (6, 1)
    assert slide_path(COLUMN, (1, 1), Direction.DOWN) == [(r, 1) for r in range(2, 7)]


def test_slide_is_idempotent_at_boundary():
    g = generate(21, 21, seed=13)
    for cell in list(g.open_cells())[:40]:
        for d in Direction:
            dest = resolve_slide(g, cell, d)
            assert resolve_slide(g, dest, d) == dest


def test_slide_stops_on_goal():
    assert resolve_slide(COLUMN, (1, 1), Direction.DOWN, goal=(3, 1)) == (3, 1)
    # goal behind the player has no effect
    assert resolve_slide(COLUMN, (4, 1), Direction.DOWN, goal=(2, 1)) == (6, 1)


def test_slide_from_goal_does_not_move():
    assert resolve_slide(COLUMN, (3, 1), Direction.DOWN, goal=(3, 1)) == (3, 1)


def test_grid_edge_counts_as_wall():
    g = grid_from(
        """
        ...
        ...
        ...
        """
    )
    assert resolve_slide(g, (1, 1), Direction.UP) == (0, 1)
    assert resolve_slide(g, (1, 1), Direction.LEFT) == (1, 0)
    assert resolve_slide(g, (0, 0), Direction.RIGHT) == (0, 2)


def test_slide_stays_on_open_cells():
    g = generate(15, 15, seed=6)
    for cell in g.open_cells():
        for d in Direction:
            for step in slide_path(g, cell, d):
                assert g.is_open(step)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("up", Direction.UP),
        ("LEFT", Direction.LEFT),
        (" r ", Direction.RIGHT),
        ("s", Direction.DOWN),
        ("north", Direction.UP),
        (Direction.DOWN, Direction.DOWN),
    ],
)
def test_parse_direction(raw, expected):
    assert parse_direction(raw) is expected


def test_parse_direction_rejects_unknown():
    with pytest.raises(ValueError):
        parse_direction("sideways")


@pytest.mark.parametrize(
    "dx,dy,expected",
    [
        (40, 3, Direction.RIGHT),
        (-40, 39, Direction.LEFT),
        (3, 40, Direction.DOWN),
        (0, -1, Direction.UP),
        # ties go vertical
        (10, 10, Direction.DOWN),
        (0, 0, None),
    ],
)
def test_direction_from_delta(dx, dy, expected):
    assert direction_from_delta(dx, dy) is expected


def test_slide_duration_caps_and_decreases():
    assert slide_duration(0) == 0.0
    assert slide_duration(1) == 1.5
    assert slide_duration(2) == 1.0
    assert slide_duration(4) == 0.5
    assert slide_duration(10) < slide_duration(5)
    assert slide_duration(3, max_duration=0.2) == 0.2


def test_slide_distance():
    assert slide_distance((1, 1), (6, 1)) == 5
    assert slide_distance((3, 9), (3, 1)) == 8
